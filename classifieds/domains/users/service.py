"""Users 도메인 서비스

사용자 생명주기를 관리합니다. 사용자 삭제는 Ads 서비스의 광고를 먼저
삭제하는 2단계 절차이며, 두 단계 사이에 트랜잭션이나 보상 처리는 없습니다.
"""

from typing import Any

from classifieds.core.logging import get_logger
from classifieds.core.context import get_request_id
from classifieds.core.peer import Peer, PeerStatus, raise_peer_failure
from classifieds.core.store import EntityStore
from classifieds.domains.users.exceptions import (
    CascadeFailedException,
    UserNotFoundException,
)
from classifieds.domains.users.models import User
from classifieds.domains.users.schemas import UserCreate, UserUpdate

logger = get_logger(__name__)

ADS_BY_USER_PATH = "/ads/by-user"


class UserService:
    """사용자 서비스"""

    def __init__(self, store: EntityStore[User], ads_peer: Peer):
        self.store = store
        self.ads_peer = ads_peer

    async def get_users(self) -> list[User]:
        """사용자 전체 조회"""
        users = await self.store.find_all()
        logger.debug(f"Found {len(users)} users")
        return list(users)

    async def get_user(self, user_id: int) -> User:
        """사용자 조회

        Args:
            user_id: 사용자 ID

        Returns:
            사용자 객체

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
        """
        user = await self.store.find_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id=user_id)
        return user

    async def create_user(self, user_data: UserCreate) -> User:
        user = User(
            username=user_data.username,
            email=user_data.email,
            password=user_data.password,
        )
        created = await self.store.save(user)
        await self.store.commit()

        logger.info(
            "User created",
            extra={
                "request_id": get_request_id(),
                "user_id": created.id,
            },
        )
        return created

    async def update_user(self, user_data: UserUpdate) -> User:
        """사용자 수정 (username/email/password 덮어쓰기)

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
        """
        user = await self.get_user(user_data.id)
        user.username = user_data.username
        user.email = user_data.email
        user.password = user_data.password
        updated = await self.store.save(user)
        await self.store.commit()

        logger.info(
            "User updated",
            extra={"request_id": get_request_id(), "user_id": updated.id},
        )
        return updated

    async def delete_user(self, user_id: int) -> None:
        """사용자 삭제

        1단계: Ads 서비스에서 사용자의 광고 삭제 (원격)
        2단계: 사용자 레코드 삭제 (로컬)

        1단계가 실패하면 2단계는 실행되지 않으므로 사용자는 남아 있습니다.
        1단계 이후 2단계 전에 프로세스가 중단되면 광고만 삭제된 상태가
        됩니다.

        Raises:
            CascadeFailedException: 광고 삭제가 실패한 경우
            UserNotFoundException: 사용자를 찾을 수 없는 경우
        """
        await self._cascade_delete_ads(user_id)
        await self._delete_user_row(user_id)

    async def _cascade_delete_ads(self, user_id: int) -> None:
        """1단계: 연관 광고 삭제"""
        result = await self.ads_peer.call(
            "DELETE", ADS_BY_USER_PATH, params={"userId": user_id}
        )

        if result.status == PeerStatus.FOUND:
            logger.debug(f"Ads deleted for user ID: {user_id}")
            return

        if result.status == PeerStatus.NOT_FOUND:
            # 삭제할 광고가 없는 경우
            logger.warning(f"No ads found to delete for user ID: {user_id}")
            return

        reason = (
            f"HTTP {result.status_code}"
            if result.status == PeerStatus.REJECTED
            else result.error or "ads service unreachable"
        )
        logger.error(
            f"Failed to delete ads for user ID: {user_id}. {reason}",
            extra={"request_id": get_request_id(), "user_id": user_id},
        )
        raise CascadeFailedException(user_id=user_id, reason=reason)

    async def _delete_user_row(self, user_id: int) -> None:
        """2단계: 사용자 레코드 삭제"""
        user = await self.get_user(user_id)
        await self.store.delete(user)
        await self.store.commit()

        logger.info(
            "User deleted",
            extra={
                "request_id": get_request_id(),
                "user_id": user_id,
                "action": "deleted",
            },
        )

    async def get_ads_by_user_id(self, user_id: int) -> list[dict[str, Any]]:
        """Ads 서비스에서 사용자의 광고 조회

        Ads 서비스가 404로 응답하면 빈 목록을 반환합니다. Ads 서비스 자체의
        사용자별 조회는 빈 결과를 404로 처리하므로 두 경로의 동작이 다릅니다.

        Raises:
            PeerRejectedException: Ads 서비스가 404 이외의 오류로 응답한 경우
            PeerUnavailableException: Ads 서비스에 연결할 수 없는 경우
        """
        result = await self.ads_peer.call(
            "GET", ADS_BY_USER_PATH, params={"userId": user_id}
        )

        if result.found:
            ads = list(result.body or [])
            logger.debug(
                f"Fetched {len(ads)} ads for user ID: {user_id}"
            )
            return ads

        if result.not_found:
            logger.warning(f"No ads found for user ID: {user_id}")
            return []

        raise_peer_failure(result)
