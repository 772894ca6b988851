"""Ads 도메인 라우터"""

from typing import AsyncGenerator

from fastapi import APIRouter, Depends, Query

from classifieds.core.config import settings
from classifieds.core.dependencies import get_users_peer, open_store
from classifieds.core.peer import Peer
from classifieds.core.schemas import ErrorResponse, MessageResponse
from classifieds.core.store import EntityStore
from classifieds.domains.ads.models import Ad
from classifieds.domains.ads.repository import AdRepository
from classifieds.domains.ads.schemas import AdCreate, AdResponse, AdUpdate
from classifieds.domains.ads.service import AdService

router = APIRouter(
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)


async def get_ad_store() -> AsyncGenerator[EntityStore[Ad], None]:
    """광고 저장소 의존성"""
    async with open_store(Ad, AdRepository) as store:
        yield store


def get_ad_service(
    store: EntityStore[Ad] = Depends(get_ad_store),
    users_peer: Peer = Depends(get_users_peer),
) -> AdService:
    """AdService 의존성"""
    return AdService(
        store,
        users_peer,
        empty_result_is_error=settings.ads_empty_result_is_error,
    )


@router.get("", response_model=list[AdResponse])
async def get_ads(service: AdService = Depends(get_ad_service)):
    """광고 목록 조회"""
    ads = await service.get_ads()
    return [AdResponse.model_validate(ad) for ad in ads]


@router.get("/by-user", response_model=list[AdResponse])
async def get_ads_by_user(
    user_id: int = Query(..., alias="userId"),
    service: AdService = Depends(get_ad_service),
):
    """사용자별 광고 조회"""
    ads = await service.get_ads_by_user(user_id)
    return [AdResponse.model_validate(ad) for ad in ads]


@router.get("/{ad_id}", response_model=AdResponse)
async def get_ad(
    ad_id: int,
    service: AdService = Depends(get_ad_service),
):
    """광고 상세 조회"""
    ad = await service.get_ad(ad_id)
    return AdResponse.model_validate(ad)


@router.post(
    "",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=201,
)
async def create_ad(
    ad_data: AdCreate,
    service: AdService = Depends(get_ad_service),
):
    """광고 생성 (작성자 존재 확인 포함)"""
    ad = await service.create_ad(ad_data)
    return MessageResponse(message="광고가 생성되었습니다.", id=ad.id)


@router.put(
    "", response_model=MessageResponse, response_model_exclude_none=True
)
async def update_ad(
    ad_data: AdUpdate,
    service: AdService = Depends(get_ad_service),
):
    """광고 수정"""
    await service.update_ad(ad_data)
    return MessageResponse(message="광고가 수정되었습니다.")


@router.delete(
    "/by-user",
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
async def delete_ads_by_user(
    user_id: int = Query(..., alias="userId"),
    service: AdService = Depends(get_ad_service),
):
    """사용자의 광고 전체 삭제"""
    count = await service.delete_ads_by_user(user_id)
    return MessageResponse(
        message=f"사용자 {user_id}의 광고 {count}건이 삭제되었습니다."
    )


@router.delete(
    "/{ad_id}",
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
async def delete_ad(
    ad_id: int,
    service: AdService = Depends(get_ad_service),
):
    """광고 삭제"""
    await service.delete_ad(ad_id)
    return MessageResponse(message="광고가 삭제되었습니다.")
