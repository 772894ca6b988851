"""Ads 도메인 서비스

광고 생명주기를 관리합니다. 광고가 참조하는 사용자는 User 서비스가
소유하므로, 쓰기 전에 매번 User 서비스에 존재 여부를 확인합니다.
확인과 쓰기 사이에 사용자가 삭제될 수 있으며 이 경합은 허용됩니다.
"""

from classifieds.core.logging import get_logger
from classifieds.core.context import get_request_id
from classifieds.core.peer import Peer, raise_peer_failure
from classifieds.core.store import EntityStore
from classifieds.core.utils.datetime import now_utc
from classifieds.domains.ads.exceptions import (
    AdNotFoundException,
    AdOwnerNotFoundException,
    NoAdsForUserException,
)
from classifieds.domains.ads.models import Ad
from classifieds.domains.ads.schemas import AdCreate, AdUpdate

logger = get_logger(__name__)

USERS_RESOURCE = "users"


class AdService:
    """광고 서비스"""

    def __init__(
        self,
        store: EntityStore[Ad],
        users_peer: Peer,
        empty_result_is_error: bool = True,
    ):
        """
        Args:
            store: 광고 저장소
            users_peer: User 서비스 Peer Client
            empty_result_is_error: 사용자별 조회/삭제 결과가 비어 있으면
                NoAdsForUserException을 발생시킬지 여부
        """
        self.store = store
        self.users_peer = users_peer
        self.empty_result_is_error = empty_result_is_error

    async def _ensure_user_exists(self, user_id: int) -> None:
        """User 서비스에 사용자 존재 여부 확인

        Raises:
            AdOwnerNotFoundException: 사용자가 없는 경우 (404)
            PeerRejectedException: User 서비스가 오류로 응답한 경우 (404)
            PeerUnavailableException: User 서비스에 연결할 수 없는 경우 (500)
        """
        result = await self.users_peer.check_exists(USERS_RESOURCE, user_id)

        if result.found:
            logger.debug(f"User with ID {user_id} exists in UserService")
            return

        if result.not_found:
            logger.warning(f"User with ID {user_id} not found in UserService")
            raise AdOwnerNotFoundException(user_id=user_id)

        raise_peer_failure(result)

    async def _filter_by_user(self, user_id: int) -> list[Ad]:
        ads = await self.store.find_all()
        return [ad for ad in ads if ad.user_id == user_id]

    async def get_ads(self) -> list[Ad]:
        """광고 전체 조회"""
        ads = await self.store.find_all()
        logger.debug(f"Found {len(ads)} ads")
        return list(ads)

    async def get_ad(self, ad_id: int) -> Ad:
        """광고 조회

        Raises:
            AdNotFoundException: 광고를 찾을 수 없는 경우
        """
        ad = await self.store.find_by_id(ad_id)
        if not ad:
            raise AdNotFoundException(ad_id=ad_id)
        return ad

    async def get_ads_by_user(self, user_id: int) -> list[Ad]:
        """사용자별 광고 조회

        Args:
            user_id: 작성자 ID

        Returns:
            광고 목록

        Raises:
            AdOwnerNotFoundException: 사용자가 없는 경우
            NoAdsForUserException: 광고가 없고 빈 결과를 오류로 처리하는 경우
        """
        await self._ensure_user_exists(user_id)

        ads = await self._filter_by_user(user_id)
        if not ads and self.empty_result_is_error:
            logger.warning(f"No ads found for user ID: {user_id}")
            raise NoAdsForUserException(user_id=user_id)
        return ads

    async def create_ad(self, ad_data: AdCreate) -> Ad:
        """광고 생성

        작성자 확인 후 생성 일시를 기록하고 저장합니다. ID는 저장소가
        부여합니다.

        Raises:
            AdOwnerNotFoundException: 작성자가 없는 경우
        """
        await self._ensure_user_exists(ad_data.user_id)

        ad = Ad(
            title=ad_data.title,
            description=ad_data.description,
            price=ad_data.price,
            user_id=ad_data.user_id,
            created_at=now_utc(),
        )
        created = await self.store.save(ad)
        await self.store.commit()

        logger.info(
            "Ad created",
            extra={
                "request_id": get_request_id(),
                "ad_id": created.id,
                "user_id": created.user_id,
            },
        )
        return created

    async def update_ad(self, ad_data: AdUpdate) -> Ad:
        """광고 수정

        작성자가 바뀌는 경우에만 새 작성자를 확인합니다.
        생성 일시는 변경하지 않습니다.

        Raises:
            AdNotFoundException: 광고를 찾을 수 없는 경우
            AdOwnerNotFoundException: 새 작성자가 없는 경우
        """
        ad = await self.get_ad(ad_data.id)

        if ad.user_id != ad_data.user_id:
            await self._ensure_user_exists(ad_data.user_id)

        ad.title = ad_data.title
        ad.description = ad_data.description
        ad.price = ad_data.price
        ad.user_id = ad_data.user_id
        updated = await self.store.save(ad)
        await self.store.commit()

        logger.info(
            "Ad updated",
            extra={"request_id": get_request_id(), "ad_id": updated.id},
        )
        return updated

    async def delete_ad(self, ad_id: int) -> None:
        """광고 삭제

        Raises:
            AdNotFoundException: 광고를 찾을 수 없는 경우
        """
        ad = await self.get_ad(ad_id)
        await self.store.delete(ad)
        await self.store.commit()

        logger.info(
            "Ad deleted",
            extra={"request_id": get_request_id(), "ad_id": ad_id},
        )

    async def delete_ads_by_user(self, user_id: int) -> int:
        """사용자의 광고 전체 삭제

        User 서비스에서 사용자를 먼저 확인하므로, 사용자 레코드가 이미
        삭제된 뒤에 호출되면 AdOwnerNotFoundException이 발생합니다.

        Returns:
            삭제된 광고 수

        Raises:
            AdOwnerNotFoundException: 사용자가 없는 경우
            NoAdsForUserException: 광고가 없고 빈 결과를 오류로 처리하는 경우
        """
        await self._ensure_user_exists(user_id)

        ads = await self._filter_by_user(user_id)
        if not ads and self.empty_result_is_error:
            logger.warning(f"No ads found to delete for user ID: {user_id}")
            raise NoAdsForUserException(user_id=user_id)

        await self.store.delete_all(ads)
        await self.store.commit()

        logger.info(
            "Ads deleted for user",
            extra={
                "request_id": get_request_id(),
                "user_id": user_id,
                "count": len(ads),
            },
        )
        return len(ads)
