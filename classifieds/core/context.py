"""요청 ID 컨텍스트 관리

요청 ID는 서비스 간 호출 시 ``X-Request-ID`` 헤더로 전달되어
게이트웨이부터 각 도메인 서비스까지 같은 값으로 로그에 남습니다.
"""

import contextvars
import uuid
from typing import Optional

REQUEST_ID_HEADER = "X-Request-ID"

# 요청 ID를 저장하는 컨텍스트 변수
request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def get_request_id() -> Optional[str]:
    """현재 요청 ID 반환"""
    return request_id_ctx.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """요청 ID 설정 (없으면 새로 생성)"""
    if request_id is None:
        request_id = str(uuid.uuid4())
    request_id_ctx.set(request_id)
    return request_id


def propagation_headers() -> dict[str, str]:
    """다른 서비스로 전달할 추적 헤더"""
    request_id = get_request_id()
    return {REQUEST_ID_HEADER: request_id} if request_id else {}
