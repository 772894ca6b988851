"""Ads 도메인 스키마 정의

JSON 필드명은 camelCase(``userId``, ``createdAt``)를 사용합니다.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from classifieds.core.schemas import BaseSchema


class AdCreate(BaseSchema):
    """광고 생성 요청 스키마"""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(default=0, ge=0, description="가격 (0 이상)")
    user_id: int = Field(..., description="작성자 ID")


class AdUpdate(AdCreate):
    """광고 수정 요청 스키마 (createdAt은 변경 불가)"""

    id: int = Field(..., gt=0)


class AdResponse(BaseSchema):
    """광고 응답 스키마"""

    id: int
    title: str
    description: Optional[str] = None
    price: float
    user_id: int
    created_at: datetime
