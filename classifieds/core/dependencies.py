"""공통 의존성 함수 정의

이 모듈은 도메인 라우터에서 사용하는 저장소/Peer Client 의존성을 정의합니다.
테스트에서는 ``app.dependency_overrides`` 로 가짜 구현을 주입합니다.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from classifieds.core.config import settings
from classifieds.core.database import Base, session_scope
from classifieds.core.peer import Peer, PeerClient
from classifieds.core.store import EntityStore, get_memory_store


@asynccontextmanager
async def open_store(
    model: type[Base],
    repository_factory: Callable[[AsyncSession], EntityStore],
) -> AsyncGenerator[EntityStore, None]:
    """설정된 저장소 백엔드로 Entity Store 열기

    Args:
        model: 엔티티 모델 클래스
        repository_factory: 세션을 받아 리포지토리를 만드는 함수

    Example::

        async def get_user_store():
            async with open_store(User, UserRepository) as store:
                yield store
    """
    if settings.storage_backend == "memory":
        yield get_memory_store(model)
        return

    async with session_scope() as session:
        yield repository_factory(session)


def get_users_peer() -> Peer:
    """User 서비스 Peer Client"""
    return PeerClient(
        service="users",
        base_url=settings.users_service_url,
        timeout=settings.peer_timeout_seconds,
    )


def get_ads_peer() -> Peer:
    """Ads 서비스 Peer Client"""
    return PeerClient(
        service="ads",
        base_url=settings.ads_service_url,
        timeout=settings.peer_timeout_seconds,
    )
