"""Gateway 모듈

클라이언트 요청을 Ads/User 서비스로 전달하는 무상태 리버스 프록시입니다.

구조:
    - proxy.py: 요청 전달 및 오류 응답 정규화
    - router.py: 공개 경로 정의
"""

from fastapi import APIRouter

from classifieds.gateway.proxy import BackendProxy, extract_error_message
from classifieds.gateway.router import ads_router, users_router

router = APIRouter()
router.include_router(ads_router, prefix="/ads", tags=["Ads"])
router.include_router(users_router, prefix="/users", tags=["Users"])

__all__ = [
    "BackendProxy",
    "extract_error_message",
    "router",
    "ads_router",
    "users_router",
]
