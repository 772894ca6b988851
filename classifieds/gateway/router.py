"""게이트웨이 라우터

Ads/User 서비스의 공개 경로를 그대로 노출하고 각 요청을 담당 서비스로
전달합니다. 경로 파라미터는 검증하지 않고 백엔드에 맡깁니다.
"""

from fastapi import APIRouter, Depends, Request

from classifieds.core.config import settings
from classifieds.core.schemas import GatewayErrorResponse
from classifieds.gateway.proxy import BackendProxy

ERROR_RESPONSES = {
    404: {"model": GatewayErrorResponse},
    500: {"model": GatewayErrorResponse},
}

ads_router = APIRouter(responses=ERROR_RESPONSES)
users_router = APIRouter(responses=ERROR_RESPONSES)


def get_ads_backend() -> BackendProxy:
    """Ads 서비스 프록시 의존성"""
    return BackendProxy(
        service="ads",
        base_url=settings.ads_service_url,
        timeout=settings.gateway_timeout_seconds,
    )


def get_users_backend() -> BackendProxy:
    """User 서비스 프록시 의존성"""
    return BackendProxy(
        service="users",
        base_url=settings.users_service_url,
        timeout=settings.gateway_timeout_seconds,
    )


# Ads


@ads_router.get("")
async def list_ads(
    request: Request, backend: BackendProxy = Depends(get_ads_backend)
):
    """광고 목록 조회"""
    return await backend.forward(request, "List ads")


@ads_router.get("/by-user")
async def list_ads_by_user(
    request: Request, backend: BackendProxy = Depends(get_ads_backend)
):
    """사용자별 광고 조회 (?userId=)"""
    return await backend.forward(request, "List ads by user")


@ads_router.get("/{ad_id}")
async def get_ad(
    ad_id: str,
    request: Request,
    backend: BackendProxy = Depends(get_ads_backend),
):
    """광고 상세 조회"""
    return await backend.forward(request, "Get ad")


@ads_router.post("")
async def create_ad(
    request: Request, backend: BackendProxy = Depends(get_ads_backend)
):
    """광고 생성"""
    return await backend.forward(request, "Create ad")


@ads_router.put("")
async def update_ad(
    request: Request, backend: BackendProxy = Depends(get_ads_backend)
):
    """광고 수정"""
    return await backend.forward(request, "Update ad")


@ads_router.delete("/by-user")
async def delete_ads_by_user(
    request: Request, backend: BackendProxy = Depends(get_ads_backend)
):
    """사용자의 광고 전체 삭제 (?userId=)"""
    return await backend.forward(request, "Delete ads by user")


@ads_router.delete("/{ad_id}")
async def delete_ad(
    ad_id: str,
    request: Request,
    backend: BackendProxy = Depends(get_ads_backend),
):
    """광고 삭제"""
    return await backend.forward(request, "Delete ad")


# Users


@users_router.get("")
async def list_users(
    request: Request, backend: BackendProxy = Depends(get_users_backend)
):
    """사용자 목록 조회"""
    return await backend.forward(request, "List users")


@users_router.get("/ads")
async def list_user_ads(
    request: Request, backend: BackendProxy = Depends(get_users_backend)
):
    """사용자의 광고 목록 조회 (?id=)"""
    return await backend.forward(request, "List user ads")


@users_router.get("/{user_id}")
async def get_user(
    user_id: str,
    request: Request,
    backend: BackendProxy = Depends(get_users_backend),
):
    """사용자 상세 조회"""
    return await backend.forward(request, "Get user")


@users_router.post("")
async def create_user(
    request: Request, backend: BackendProxy = Depends(get_users_backend)
):
    """사용자 생성"""
    return await backend.forward(request, "Create user")


@users_router.put("")
async def update_user(
    request: Request, backend: BackendProxy = Depends(get_users_backend)
):
    """사용자 수정"""
    return await backend.forward(request, "Update user")


@users_router.delete("")
async def delete_user(
    request: Request, backend: BackendProxy = Depends(get_users_backend)
):
    """사용자 삭제 (?id=)"""
    return await backend.forward(request, "Delete user")


@users_router.delete("/{user_id}")
async def delete_user_by_path(
    user_id: str,
    request: Request,
    backend: BackendProxy = Depends(get_users_backend),
):
    """사용자 삭제 (경로형, ``DELETE /users?id=`` 로 변환하여 전달)"""
    return await backend.forward(
        request, "Delete user", path="/users", query=f"id={user_id}"
    )
