"""Ads 도메인 모듈

광고 생명주기를 소유하는 Ads 서비스입니다. 작성자 검증은 User 서비스에
대한 동기 호출로 수행합니다.
"""

from classifieds.domains.ads.exceptions import (
    AdNotFoundException,
    AdOwnerNotFoundException,
    AdsErrorCode,
    NoAdsForUserException,
)
from classifieds.domains.ads.models import Ad
from classifieds.domains.ads.router import router
from classifieds.domains.ads.schemas import AdCreate, AdResponse, AdUpdate
from classifieds.domains.ads.service import AdService

__all__ = [
    "Ad",
    "AdService",
    "AdCreate",
    "AdUpdate",
    "AdResponse",
    "router",
    "AdsErrorCode",
    "AdNotFoundException",
    "AdOwnerNotFoundException",
    "NoAdsForUserException",
]
