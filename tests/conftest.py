"""테스트 설정"""

import os
from types import SimpleNamespace
from typing import Generator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from docker import from_env
from docker.errors import DockerException
from httpx import ASGITransport, AsyncClient
from testcontainers.postgres import PostgresContainer

from classifieds.core.dependencies import get_ads_peer, get_users_peer
from classifieds.core.peer import PeerClient, PeerResult, PeerStatus
from classifieds.core.store import InMemoryStore
from classifieds.domains.ads.models import Ad
from classifieds.domains.ads.router import get_ad_store
from classifieds.domains.users.models import User
from classifieds.domains.users.router import get_user_store
from classifieds.gateway.proxy import BackendProxy
from classifieds.gateway.router import get_ads_backend, get_users_backend
from classifieds.main import create_app

USERS_URL = "http://users.test"
ADS_URL = "http://ads.test"


def _is_docker_available() -> bool:
    """로컬 환경에서 Docker 접근 가능 여부 확인"""
    if os.getenv("FORCE_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return True
    if os.getenv("SKIP_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return False

    try:
        client = from_env()
        client.ping()
        return True
    except DockerException:
        return False
    except Exception:
        return False


DOCKER_AVAILABLE = _is_docker_available()


def asgi_transport(app) -> ASGITransport:
    """앱 예외를 응답(500)으로 돌려주는 ASGI 전송 계층"""
    return ASGITransport(app=app, raise_app_exceptions=False)


def peer_result(
    status: PeerStatus,
    status_code: int | None = None,
    body=None,
    error: str | None = None,
    service: str = "users",
) -> PeerResult:
    """가짜 Peer 응답 생성"""
    return PeerResult(
        service=service,
        status=status,
        status_code=status_code,
        body=body,
        error=error,
    )


@pytest.fixture
def user_store() -> InMemoryStore[User]:
    """User 서비스 저장소 (메모리)"""
    return InMemoryStore()


@pytest.fixture
def ad_store() -> InMemoryStore[Ad]:
    """Ads 서비스 저장소 (메모리)"""
    return InMemoryStore()


@pytest.fixture
def fake_users_peer():
    """User 서비스 가짜 Peer Client (기본: 사용자 존재)"""
    peer = AsyncMock()
    peer.check_exists.return_value = peer_result(PeerStatus.FOUND, 200)
    return peer


@pytest.fixture
def fake_ads_peer():
    """Ads 서비스 가짜 Peer Client (기본: 200 빈 목록)"""
    peer = AsyncMock()
    peer.call.return_value = peer_result(
        PeerStatus.FOUND, 200, body=[], service="ads"
    )
    return peer


@pytest_asyncio.fixture
async def ads_client(ad_store, fake_users_peer):
    """Ads 서비스 단독 클라이언트 (User 서비스는 가짜)"""
    app = create_app("ads")
    app.dependency_overrides[get_ad_store] = lambda: ad_store
    app.dependency_overrides[get_users_peer] = lambda: fake_users_peer

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def users_client(user_store, fake_ads_peer):
    """User 서비스 단독 클라이언트 (Ads 서비스는 가짜)"""
    app = create_app("users")
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_ads_peer] = lambda: fake_ads_peer

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def system(user_store, ad_store):
    """게이트웨이 + User 서비스 + Ads 서비스를 프로세스 내에서 연결

    서비스 간 호출은 실제 PeerClient/BackendProxy가 ASGI 전송 계층으로
    수행합니다. ``system.ads_down()`` 으로 Ads 서비스 장애를 흉내낼 수
    있습니다.
    """
    users_app = create_app("users")
    ads_app = create_app("ads")
    gateway_app = create_app("gateway")

    users_peer = PeerClient(
        "users", USERS_URL, timeout=5.0, transport=asgi_transport(users_app)
    )
    ads_peer = PeerClient(
        "ads", ADS_URL, timeout=5.0, transport=asgi_transport(ads_app)
    )

    users_app.dependency_overrides[get_user_store] = lambda: user_store
    users_app.dependency_overrides[get_ads_peer] = lambda: ads_peer
    ads_app.dependency_overrides[get_ad_store] = lambda: ad_store
    ads_app.dependency_overrides[get_users_peer] = lambda: users_peer

    gateway_app.dependency_overrides[get_users_backend] = lambda: BackendProxy(
        "users", USERS_URL, timeout=5.0, transport=asgi_transport(users_app)
    )
    gateway_app.dependency_overrides[get_ads_backend] = lambda: BackendProxy(
        "ads", ADS_URL, timeout=5.0, transport=asgi_transport(ads_app)
    )

    def ads_down(transport) -> None:
        users_app.dependency_overrides[get_ads_peer] = lambda: PeerClient(
            "ads", ADS_URL, timeout=5.0, transport=transport
        )

    yield SimpleNamespace(
        users_app=users_app,
        ads_app=ads_app,
        gateway_app=gateway_app,
        user_store=user_store,
        ad_store=ad_store,
        ads_down=ads_down,
    )

    for app in (users_app, ads_app, gateway_app):
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def gateway_client(system):
    """전체 시스템 앞단의 게이트웨이 클라이언트"""
    async with AsyncClient(
        transport=ASGITransport(app=system.gateway_app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """PostgreSQL 테스트 컨테이너"""
    if not DOCKER_AVAILABLE:
        pytest.skip("Docker is not available; skipping container-based tests.")

    with PostgresContainer("postgres:16-alpine", driver="asyncpg") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def test_database_url(postgres_container: PostgresContainer) -> str:
    """테스트 데이터베이스 URL"""
    return str(postgres_container.get_connection_url())
