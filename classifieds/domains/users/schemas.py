"""Users 도메인 스키마 정의"""

from typing import Optional

from pydantic import Field

from classifieds.core.schemas import BaseSchema


class UserCreate(BaseSchema):
    """사용자 생성 요청 스키마"""

    username: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=255)


class UserUpdate(UserCreate):
    """사용자 수정 요청 스키마 (username/email/password 전체 덮어쓰기)"""

    id: int = Field(..., gt=0)


class UserResponse(BaseSchema):
    """사용자 응답 스키마 (비밀번호 제외)"""

    id: int
    username: str
    email: Optional[str] = None
