"""Ads 도메인 예외 정의"""

from enum import Enum

from classifieds.core.exceptions import NotFoundException

ADS_ERROR_TITLE = "Ads error"


class AdsErrorCode(str, Enum):
    """광고 도메인 에러 코드"""

    AD_NOT_FOUND = "AD_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NO_ADS_FOR_USER = "NO_ADS_FOR_USER"


class AdNotFoundException(NotFoundException):
    """광고를 찾을 수 없는 경우"""

    def __init__(self, ad_id: int | None = None):
        detail = {"ad_id": ad_id} if ad_id is not None else {}
        super().__init__(
            message=f"ID가 {ad_id}인 광고를 찾을 수 없습니다.",
            error_code=AdsErrorCode.AD_NOT_FOUND,
            detail=detail,
            title=ADS_ERROR_TITLE,
        )


class AdOwnerNotFoundException(NotFoundException):
    """광고가 참조하는 사용자가 User 서비스에 없는 경우"""

    def __init__(self, user_id: int | None = None):
        detail = {"user_id": user_id} if user_id is not None else {}
        super().__init__(
            message=f"ID가 {user_id}인 사용자를 찾을 수 없습니다.",
            error_code=AdsErrorCode.USER_NOT_FOUND,
            detail=detail,
            title=ADS_ERROR_TITLE,
        )


class NoAdsForUserException(NotFoundException):
    """사용자의 광고가 하나도 없는 경우"""

    def __init__(self, user_id: int | None = None):
        detail = {"user_id": user_id} if user_id is not None else {}
        super().__init__(
            message=f"ID가 {user_id}인 사용자의 광고가 없습니다.",
            error_code=AdsErrorCode.NO_ADS_FOR_USER,
            detail=detail,
            title=ADS_ERROR_TITLE,
        )
