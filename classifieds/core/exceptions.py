from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from classifieds.core.logging import get_logger

logger = get_logger(__name__)

GENERAL_ERROR_TITLE = "General error"


class ErrorCode(str, Enum):
    """전역 에러 코드"""

    # 공통 에러
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # 서비스 간 호출 관련
    PEER_UNAVAILABLE = "PEER_UNAVAILABLE"
    PEER_REJECTED = "PEER_REJECTED"


class BaseAPIException(HTTPException):
    """기본 API 예외 클래스

    응답 본문은 ``{"title", "detail", "code"}`` 형태로 직렬화됩니다.
    """

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        detail: Optional[Dict[str, Any]] = None,
        title: str = GENERAL_ERROR_TITLE,
    ):
        self.error_code = error_code
        self.message = message
        self.title = title
        self.detail_info = detail or {}
        super().__init__(status_code=status_code, detail=message)


class NotFoundException(BaseAPIException):
    """404 Not Found"""

    def __init__(
        self,
        message: str = "리소스를 찾을 수 없습니다.",
        error_code: str = ErrorCode.NOT_FOUND,
        detail: Optional[Dict[str, Any]] = None,
        title: str = GENERAL_ERROR_TITLE,
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=error_code,
            message=message,
            detail=detail,
            title=title,
        )


class InternalServerException(BaseAPIException):
    """500 Internal Server Error"""

    def __init__(
        self,
        message: str = "서버 내부 오류가 발생했습니다.",
        error_code: str = ErrorCode.INTERNAL_ERROR,
        detail: Optional[Dict[str, Any]] = None,
        title: str = GENERAL_ERROR_TITLE,
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=error_code,
            message=message,
            detail=detail,
            title=title,
        )


class PeerUnavailableException(InternalServerException):
    """다른 서비스 호출이 전송 단계에서 실패한 경우 (연결 거부, 타임아웃 등)"""

    def __init__(
        self,
        service: str,
        cause: str,
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=f"{service} 서비스에 연결할 수 없습니다: {cause}",
            error_code=ErrorCode.PEER_UNAVAILABLE,
            detail={"service": service, "cause": cause, **(detail or {})},
        )


class PeerRejectedException(NotFoundException):
    """다른 서비스가 성공도 404도 아닌 상태 코드로 응답한 경우

    참조 오류와 같은 404로 응답합니다. 원격 장애와 "존재하지 않음"이
    같은 상태 코드로 합쳐진다는 점에 유의하세요.
    """

    def __init__(
        self,
        service: str,
        status_code: Optional[int],
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=(
                f"{service} 서비스가 요청을 거부했습니다: "
                f"HTTP {status_code}"
            ),
            error_code=ErrorCode.PEER_REJECTED,
            detail={
                "service": service,
                "status_code": status_code,
                **(detail or {}),
            },
        )


def error_body(title: str, detail: str, code: str) -> Dict[str, str]:
    """도메인 서비스 에러 응답 본문 생성"""
    if isinstance(code, Enum):
        code = code.value
    return {"title": title, "detail": detail, "code": code}


async def base_exception_handler(
    request: Request, exc: BaseAPIException
) -> JSONResponse:
    """BaseAPIException 핸들러"""
    body = error_body(exc.title, exc.message, exc.error_code)
    logger.error(
        f"Exception during request processing! {exc.message}",
        extra={"error_code": body["code"], "error_detail": exc.detail_info},
    )
    return JSONResponse(status_code=exc.status_code, content=body)


async def http_exception_handler(
    request: Request, exc: HTTPException
) -> JSONResponse:
    """HTTPException 핸들러"""
    code = (
        ErrorCode.NOT_FOUND
        if exc.status_code == status.HTTP_404_NOT_FOUND
        else ErrorCode.INTERNAL_ERROR
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(GENERAL_ERROR_TITLE, str(exc.detail), code),
    )


async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """일반 예외 핸들러"""
    logger.exception(f"Unhandled exception during request processing! {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            GENERAL_ERROR_TITLE,
            str(exc) or "서버 내부 오류가 발생했습니다.",
            ErrorCode.INTERNAL_ERROR,
        ),
    )
