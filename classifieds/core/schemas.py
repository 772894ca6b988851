"""공통 API 응답 스키마

도메인 서비스의 응답 규칙:
    - 조회: 엔티티 JSON (camelCase 필드명)
    - 변경: ``{"message": "...", "id": 1}`` (id는 생성 시에만 포함)
    - 에러: ``{"title": "...", "detail": "...", "code": "..."}``

게이트웨이는 에러를 ``{"error": "..."}`` 형태로 정규화합니다.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """기본 스키마 (ORM 모델 변환용, camelCase 직렬화)"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class MessageResponse(BaseModel):
    """변경 API 응답"""

    message: str = Field(..., description="처리 결과 메시지")
    id: Optional[int] = Field(default=None, description="생성된 엔티티 ID")


class ErrorResponse(BaseModel):
    """도메인 서비스 에러 응답

    Example::

        {
            "title": "Ads error",
            "detail": "ID가 999999인 사용자를 찾을 수 없습니다.",
            "code": "USER_NOT_FOUND"
        }
    """

    title: str = Field(..., description="에러 분류")
    detail: str = Field(..., description="에러 메시지")
    code: str = Field(..., description="에러 코드")


class GatewayErrorResponse(BaseModel):
    """게이트웨이 에러 응답"""

    error: str = Field(..., description="에러 메시지")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = "healthy"
    app_name: str
    service: str
    environment: str
