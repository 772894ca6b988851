"""요청/응답 로깅 미들웨어"""

from typing import Callable, cast

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from classifieds.core.context import REQUEST_ID_HEADER, set_request_id
from classifieds.core.logging import get_logger
from classifieds.core.utils.time import measure_time

logger = get_logger(__name__)

# 로깅 제외 경로
EXCLUDE_PATHS = {"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}


def describe(request: Request) -> str:
    query = f"?{request.url.query}" if request.url.query else ""
    return f"{request.method} {request.url.path}{query}"


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청 ID 부여, 요청/응답 로깅 및 처리 시간 측정

    상위 서비스(게이트웨이 또는 다른 도메인 서비스)가 보낸 ``X-Request-ID``
    가 있으면 그대로 이어받고, 없으면 새로 만듭니다.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        if request.url.path in EXCLUDE_PATHS:
            return cast(Response, await call_next(request))

        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        client = request.client.host if request.client else "unknown"
        logger.info(f"→ {describe(request)} | Client: {client}")

        try:
            with measure_time() as timer:
                response = await call_next(request)
        except Exception as e:
            logger.error(
                f"✗ {describe(request)} | Error: {e} "
                f"| Time: {timer['elapsed_ms']:.2f}ms"
            )
            raise

        elapsed = timer["elapsed_ms"]
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.2f}ms"

        if response.status_code < 400:
            logger.info(
                f"✓ {describe(request)} | Status: {response.status_code} "
                f"| Time: {elapsed:.2f}ms"
            )
        else:
            logger.warning(
                f"✗ {describe(request)} | Status: {response.status_code} "
                f"| Time: {elapsed:.2f}ms"
            )

        return cast(Response, response)
