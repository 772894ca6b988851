"""Gateway API 통합 테스트 - 전달 및 오류 정규화 검증"""

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from classifieds.gateway.proxy import BackendProxy
from classifieds.gateway.router import get_ads_backend, get_users_backend
from classifieds.main import create_app


class RecordingBackend:
    """요청을 기록하고 정해진 응답을 돌려주는 가짜 백엔드"""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.response = httpx.Response(200, json=[])
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            self.error.request = request
            raise self.error
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def ads_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def users_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest_asyncio.fixture
async def client(ads_backend, users_backend):
    """가짜 백엔드에 연결된 게이트웨이 클라이언트"""
    app = create_app("gateway")
    app.dependency_overrides[get_ads_backend] = lambda: BackendProxy(
        "ads",
        "http://ads.test",
        timeout=1.0,
        transport=httpx.MockTransport(ads_backend),
    )
    app.dependency_overrides[get_users_backend] = lambda: BackendProxy(
        "users",
        "http://users.test",
        timeout=1.0,
        transport=httpx.MockTransport(users_backend),
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


class TestForwarding:
    """요청 전달 테스트"""

    @pytest.mark.asyncio
    async def test_success_is_copied_verbatim(self, client, ads_backend):
        """백엔드 성공 응답은 상태 코드와 본문을 그대로 전달"""
        ads_backend.response = httpx.Response(
            200, json=[{"id": 1, "userId": 2}]
        )

        response = await client.get("/ads")

        assert response.status_code == 200
        assert response.json() == [{"id": 1, "userId": 2}]
        assert str(ads_backend.last.url) == "http://ads.test/ads"

    @pytest.mark.asyncio
    async def test_query_is_forwarded(self, client, ads_backend):
        await client.get("/ads/by-user", params={"userId": 3})

        assert ads_backend.last.url.path == "/ads/by-user"
        assert ads_backend.last.url.params["userId"] == "3"

    @pytest.mark.asyncio
    async def test_body_and_status_are_forwarded(self, client, users_backend):
        users_backend.response = httpx.Response(
            201, json={"message": "created", "id": 1}
        )

        response = await client.post("/users", json={"username": "alice"})

        assert response.status_code == 201
        assert response.json() == {"message": "created", "id": 1}
        assert users_backend.last.method == "POST"
        assert json.loads(users_backend.last.content) == {
            "username": "alice"
        }
        assert users_backend.last.headers["content-type"] == (
            "application/json"
        )

    @pytest.mark.asyncio
    async def test_routes_go_to_owning_service(
        self, client, ads_backend, users_backend
    ):
        await client.get("/users/ads", params={"id": 1})
        await client.delete("/ads/7")

        assert users_backend.last.url.path == "/users/ads"
        assert ads_backend.last.method == "DELETE"
        assert ads_backend.last.url.path == "/ads/7"

    @pytest.mark.asyncio
    async def test_path_style_user_delete(self, client, users_backend):
        """DELETE /users/{id} 는 DELETE /users?id= 로 전달"""
        await client.delete("/users/5")

        assert users_backend.last.method == "DELETE"
        assert users_backend.last.url.path == "/users"
        assert users_backend.last.url.params["id"] == "5"

    @pytest.mark.asyncio
    async def test_request_id_is_propagated(self, client, ads_backend):
        response = await client.get(
            "/ads", headers={"X-Request-ID": "trace-1"}
        )

        assert response.headers["x-request-id"] == "trace-1"
        assert ads_backend.last.headers["x-request-id"] == "trace-1"


class TestErrorNormalization:
    """백엔드 오류 정규화 테스트"""

    @pytest.mark.asyncio
    async def test_domain_error_keeps_status(self, client, ads_backend):
        """도메인 오류는 같은 상태 코드의 {"error": detail}"""
        ads_backend.response = httpx.Response(
            404,
            json={
                "title": "Ads error",
                "detail": "ID가 9인 광고를 찾을 수 없습니다.",
                "code": "AD_NOT_FOUND",
            },
        )

        response = await client.get("/ads/9")

        assert response.status_code == 404
        assert response.json() == {
            "error": "ID가 9인 광고를 찾을 수 없습니다."
        }

    @pytest.mark.asyncio
    async def test_backend_500(self, client, users_backend):
        users_backend.response = httpx.Response(
            500, text="Internal Server Error"
        )

        response = await client.get("/users")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}

    @pytest.mark.asyncio
    async def test_connection_failure_names_operation(
        self, client, ads_backend
    ):
        """백엔드 연결 실패는 500 "<작업> failed: <원인>" """
        ads_backend.error = httpx.ConnectError("connection refused")

        response = await client.get("/ads/1")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Get ad failed: connection refused"
        }

    @pytest.mark.asyncio
    async def test_timeout_names_operation(self, client, users_backend):
        users_backend.error = httpx.ReadTimeout("timed out")

        response = await client.delete("/users", params={"id": 1})

        assert response.status_code == 500
        assert response.json()["error"].startswith("Delete user failed:")

    @pytest.mark.asyncio
    async def test_malformed_backend_response_names_operation(
        self, client, ads_backend
    ):
        """해석할 수 없는 백엔드 응답은 500 "<작업> failed: <원인>" """
        ads_backend.error = httpx.RemoteProtocolError("malformed response")

        response = await client.get("/ads/1")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Get ad failed: malformed response"
        }

    @pytest.mark.asyncio
    async def test_invalid_backend_url_names_operation(
        self, client, users_backend
    ):
        users_backend.error = httpx.InvalidURL("Invalid port: '99999'")

        response = await client.get("/users/1")

        assert response.status_code == 500
        assert response.json()["error"].startswith("Get user failed:")

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/nowhere")

        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_health_is_served_locally(
        self, client, ads_backend, users_backend
    ):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["service"] == "gateway"
        assert ads_backend.requests == []
        assert users_backend.requests == []


class TestUnexpectedFailure:
    """httpx 이외의 게이트웨이 내부 오류"""

    @pytest.mark.asyncio
    async def test_local_failure_names_operation(self, ads_backend):
        """예외 핸들러도 경로 대신 작업 이름으로 응답"""
        ads_backend.error = RuntimeError("boom")
        app = create_app("gateway")
        app.dependency_overrides[get_ads_backend] = lambda: BackendProxy(
            "ads",
            "http://ads.test",
            timeout=1.0,
            transport=httpx.MockTransport(ads_backend),
        )

        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as client:
            response = await client.get("/ads/1")

        assert response.status_code == 500
        assert response.json() == {"error": "Get ad failed: boom"}

    @pytest.mark.asyncio
    async def test_failure_before_forwarding_names_route(self):
        """작업 이름이 정해지기 전 오류는 메서드와 경로 사용"""

        def broken_backend():
            raise RuntimeError("no backend")

        app = create_app("gateway")
        app.dependency_overrides[get_ads_backend] = broken_backend

        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as client:
            response = await client.get("/ads/1")

        assert response.status_code == 500
        assert response.json() == {"error": "GET /ads/1 failed: no backend"}
