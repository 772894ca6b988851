from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from classifieds.core.config import settings
from classifieds.core.database import close_db, init_db
from classifieds.core.exceptions import (
    BaseAPIException,
    base_exception_handler,
    generic_exception_handler,
    http_exception_handler,
)
from classifieds.core.logging import get_logger, setup_logging
from classifieds.core.middlewares import LoggingMiddleware
from classifieds.core.schemas import HealthResponse
from classifieds.domains.ads import Ad
from classifieds.domains.ads import router as ads_router
from classifieds.domains.users import User
from classifieds.domains.users import router as users_router
from classifieds.gateway import router as gateway_router

# 로깅 설정 초기화
setup_logging()
logger = get_logger(__name__)

SERVICE_ROLES = ("gateway", "users", "ads")

# 서비스별 소유 테이블
OWNED_TABLES = {
    "users": [User.__table__],
    "ads": [Ad.__table__],
}


def _uses_database(role: str) -> bool:
    return role in OWNED_TABLES and settings.storage_backend == "database"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리"""
    role = app.state.service_role
    logger.info(f"🚀 Starting {settings.app_name} ({role})...")

    if _uses_database(role) and settings.auto_create_tables:
        await init_db(OWNED_TABLES[role])

    yield
    logger.info(f"👋 Shutting down {settings.app_name} ({role})...")
    if _uses_database(role):
        await close_db()


async def gateway_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """게이트웨이 일반 예외 핸들러

    프록시가 기록한 작업 이름이 있으면 전송 실패와 같은 형식
    (``"<작업> failed: <원인>"``) 으로 응답합니다.
    """
    operation = getattr(
        request.state, "operation", f"{request.method} {request.url.path}"
    )
    logger.exception(f"Gateway request failed: {operation} | Cause: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": f"{operation} failed: {exc}"},
    )


async def gateway_http_exception_handler(
    request: Request, exc: HTTPException
) -> JSONResponse:
    """게이트웨이 HTTPException 핸들러 (라우트 없음 등)"""
    return JSONResponse(
        status_code=exc.status_code, content={"error": str(exc.detail)}
    )


def create_app(role: Optional[str] = None) -> FastAPI:
    """FastAPI 애플리케이션 팩토리

    Args:
        role: 서비스 역할 (gateway / users / ads). None이면 설정값 사용.
    """
    role = role or settings.service_role
    if role not in SERVICE_ROLES:
        raise ValueError(f"Unknown service role: {role}")

    app = FastAPI(
        title=f"{settings.app_name} {role.capitalize()}",
        description="Users / Ads microservices with a proxy gateway",
        version="0.1.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.service_role = role

    # 미들웨어 설정 (순서 중요: 아래에서 위로 실행됨)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # 예외 핸들러 및 라우터 등록
    if role == "gateway":
        app.add_exception_handler(
            HTTPException, gateway_http_exception_handler
        )
        app.add_exception_handler(Exception, gateway_exception_handler)
        app.include_router(gateway_router)
    else:
        app.add_exception_handler(BaseAPIException, base_exception_handler)
        app.add_exception_handler(HTTPException, http_exception_handler)
        app.add_exception_handler(Exception, generic_exception_handler)
        if role == "users":
            app.include_router(users_router, prefix="/users", tags=["Users"])
        else:
            app.include_router(ads_router, prefix="/ads", tags=["Ads"])

    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check():
        """헬스 체크 엔드포인트"""
        return HealthResponse(
            app_name=settings.app_name,
            service=role,
            environment=settings.app_env,
        )

    return app


app = create_app()
