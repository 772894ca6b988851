"""Ads 도메인 모델 정의

Ads 서비스가 단독으로 소유하는 테이블입니다. ``user_id`` 는 User 서비스의
사용자를 가리키지만 데이터베이스가 다르므로 외래 키 제약은 없습니다.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from classifieds.core.database import Base


class Ad(Base):
    """광고 모델"""

    __tablename__ = "ads"

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="광고 ID (저장소가 부여)",
    )
    title: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="제목"
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="설명"
    )
    price: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=False, comment="가격"
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="작성자 ID (User 서비스 소유, 외래 키 아님)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="생성 일시 (생성 후 변경되지 않음)",
    )

    def __repr__(self) -> str:
        return (
            f"<Ad(id={self.id}, user_id={self.user_id}, "
            f"title={self.title})>"
        )
