"""게이트웨이 프록시

요청의 메서드, 경로, 쿼리, 본문을 그대로 백엔드 서비스로 전달하고
응답을 돌려줍니다. 비즈니스 로직과 상태는 없습니다.

응답 규칙:
    - 백엔드 성공 응답: 상태 코드와 본문을 그대로 복사
    - 백엔드 오류 응답 (4xx/5xx): 같은 상태 코드로 ``{"error": ...}``
    - 전송 실패 (연결 불가, 타임아웃 등): 500 ``{"error": "<작업> failed: <원인>"}``
"""

from typing import Optional

import httpx
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from classifieds.core.logging import get_logger
from classifieds.core.context import propagation_headers
from classifieds.core.utils.time import measure_time

logger = get_logger(__name__)

# 백엔드로 전달할 요청 헤더
FORWARDED_HEADERS = ("content-type", "accept")

# 오류 메시지로 사용할 백엔드 응답 필드 (우선순위 순)
ERROR_MESSAGE_KEYS = ("detail", "error", "message")


def extract_error_message(response: httpx.Response) -> str:
    """백엔드 오류 응답에서 메시지 추출

    도메인 서비스의 ``{"title", "detail", "code"}`` 에서는 detail을,
    그 밖의 JSON에서는 error/message를 사용하고, JSON이 아니면 본문
    텍스트를 그대로 사용합니다.
    """
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(payload, dict):
        for key in ERROR_MESSAGE_KEYS:
            value = payload.get(key)
            if value:
                return value if isinstance(value, str) else str(value)

    return response.text or response.reason_phrase


def gateway_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


class BackendProxy:
    """단일 백엔드 서비스로 요청을 전달하는 프록시"""

    def __init__(
        self,
        service: str,
        base_url: str,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.service = service
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def build_url(self, path: str, query: str = "") -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        return f"{url}?{query}" if query else url

    async def forward(
        self,
        request: Request,
        operation: str,
        path: Optional[str] = None,
        query: Optional[str] = None,
    ) -> Response:
        """요청을 백엔드로 전달

        Args:
            request: 들어온 요청
            operation: 작업 이름 (전송 실패 메시지에 사용)
            path: 백엔드 경로 (None이면 요청 경로 그대로)
            query: 백엔드 쿼리 문자열 (None이면 요청 쿼리 그대로)

        Returns:
            Response: 백엔드 응답 또는 정규화된 오류 응답
        """
        # 게이트웨이 예외 핸들러가 오류 메시지에 사용
        request.state.operation = operation
        url = self.build_url(
            path if path is not None else request.url.path,
            query if query is not None else request.url.query,
        )
        body = await request.body()
        headers = {
            name: request.headers[name]
            for name in FORWARDED_HEADERS
            if name in request.headers
        }
        headers.update(propagation_headers())

        with measure_time() as timer:
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self.transport
                ) as client:
                    backend_response = await client.request(
                        request.method,
                        url,
                        content=body or None,
                        headers=headers,
                    )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                cause = str(e) or e.__class__.__name__
                logger.error(
                    f"{operation} failed: {request.method} {url} "
                    f"| Service: {self.service} | Cause: {cause}"
                )
                return gateway_error(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    f"{operation} failed: {cause}",
                )

        logger.debug(
            f"Proxied {request.method} {url} "
            f"| Status: {backend_response.status_code} "
            f"| Time: {timer['elapsed_ms']:.2f}ms"
        )

        if backend_response.is_error:
            return gateway_error(
                backend_response.status_code,
                extract_error_message(backend_response),
            )

        return Response(
            content=backend_response.content,
            status_code=backend_response.status_code,
            media_type=backend_response.headers.get("content-type"),
        )
