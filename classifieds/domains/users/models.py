"""Users 도메인 모델 정의

User 서비스가 단독으로 소유하는 테이블입니다.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from classifieds.core.database import Base


class User(Base):
    """사용자 모델"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="사용자 ID (저장소가 부여)",
    )
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="사용자 이름"
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="이메일"
    )
    password: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="비밀번호 (불투명 문자열)"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
