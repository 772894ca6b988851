"""Users 도메인 라우터"""

from typing import Any, AsyncGenerator

from fastapi import APIRouter, Depends, Query

from classifieds.core.dependencies import get_ads_peer, open_store
from classifieds.core.peer import Peer
from classifieds.core.schemas import ErrorResponse, MessageResponse
from classifieds.core.store import EntityStore
from classifieds.domains.users.models import User
from classifieds.domains.users.repository import UserRepository
from classifieds.domains.users.schemas import (
    UserCreate,
    UserResponse,
    UserUpdate,
)
from classifieds.domains.users.service import UserService

router = APIRouter(
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)


async def get_user_store() -> AsyncGenerator[EntityStore[User], None]:
    """사용자 저장소 의존성"""
    async with open_store(User, UserRepository) as store:
        yield store


def get_user_service(
    store: EntityStore[User] = Depends(get_user_store),
    ads_peer: Peer = Depends(get_ads_peer),
) -> UserService:
    """UserService 의존성"""
    return UserService(store, ads_peer)


@router.get("", response_model=list[UserResponse])
async def get_users(service: UserService = Depends(get_user_service)):
    """사용자 목록 조회"""
    users = await service.get_users()
    return [UserResponse.model_validate(user) for user in users]


@router.get("/ads", response_model=list[dict[str, Any]])
async def get_user_ads(
    user_id: int = Query(..., alias="id"),
    service: UserService = Depends(get_user_service),
):
    """사용자의 광고 목록 조회 (Ads 서비스 위임)"""
    return await service.get_ads_by_user_id(user_id)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
):
    """사용자 상세 조회"""
    user = await service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.post(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=201,
)
async def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service),
):
    """사용자 생성"""
    user = await service.create_user(user_data)
    return MessageResponse(message="사용자가 생성되었습니다.", id=user.id)


@router.put(
    "", response_model=MessageResponse, response_model_exclude_none=True
)
async def update_user(
    user_data: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    """사용자 수정"""
    await service.update_user(user_data)
    return MessageResponse(message="사용자 정보가 수정되었습니다.")


@router.delete(
    "", response_model=MessageResponse, response_model_exclude_none=True
)
async def delete_user(
    user_id: int = Query(..., alias="id"),
    service: UserService = Depends(get_user_service),
):
    """사용자 삭제 (연관 광고 먼저 삭제)"""
    await service.delete_user(user_id)
    return MessageResponse(message="사용자와 관련 광고가 삭제되었습니다.")
