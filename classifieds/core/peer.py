"""서비스 간 호출 클라이언트 (Peer Client)

한 서비스가 다른 서비스가 소유한 상태를 확인하거나 변경할 때 사용합니다.
호출은 1회만 시도하며 재시도/백오프는 없습니다. 실패는 예외 대신
``PeerResult`` 값으로 돌려주고, 어떻게 대응할지는 호출한 쪽이 결정합니다.

결과 분류:
    - FOUND: 2xx 응답
    - NOT_FOUND: 404 응답
    - REJECTED: 그 밖의 상태 코드 (원격 서비스 오류 포함)
    - UNREACHABLE: 연결 실패, 타임아웃, 잘못된 URL, 해석할 수 없는 응답
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, NoReturn, Optional, Protocol

import httpx

from classifieds.core.exceptions import (
    PeerRejectedException,
    PeerUnavailableException,
)
from classifieds.core.logging import get_logger
from classifieds.core.context import propagation_headers
from classifieds.core.utils.time import measure_time

logger = get_logger(__name__)


class PeerStatus(str, Enum):
    """원격 호출 결과 분류"""

    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    REJECTED = "REJECTED"
    UNREACHABLE = "UNREACHABLE"


@dataclass(frozen=True)
class PeerResult:
    """원격 호출 결과"""

    service: str
    status: PeerStatus
    status_code: Optional[int] = None
    body: Any = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == PeerStatus.FOUND

    @property
    def not_found(self) -> bool:
        return self.status == PeerStatus.NOT_FOUND


class Peer(Protocol):
    """Peer Client 인터페이스 (테스트에서 가짜 구현으로 대체 가능)"""

    async def check_exists(
        self, resource: str, entity_id: int
    ) -> PeerResult: ...

    async def call(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> PeerResult: ...


class PeerClient:
    """httpx 기반 Peer Client"""

    def __init__(
        self,
        service: str,
        base_url: str,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            service: 대상 서비스 이름 (로그/에러 메시지용)
            base_url: 대상 서비스 주소 (예: http://localhost:8089)
            timeout: 요청 타임아웃 (초)
            transport: httpx 전송 계층 (테스트에서 ASGI 전송 주입용)
        """
        self.service = service
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def check_exists(self, resource: str, entity_id: int) -> PeerResult:
        """``GET {base}/{resource}/{id}`` 로 존재 여부 확인

        Args:
            resource: 리소스 경로 (예: "users")
            entity_id: 확인할 엔티티 ID

        Returns:
            PeerResult: 200이면 FOUND, 404이면 NOT_FOUND
        """
        return await self.call("GET", f"/{resource}/{entity_id}")

    async def call(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> PeerResult:
        """원격 서비스 호출

        Args:
            method: HTTP 메서드
            path: 요청 경로
            params: 쿼리 파라미터

        Returns:
            PeerResult: 분류된 호출 결과 (2xx 응답은 JSON 본문 포함)
        """
        url = self.url_for(path)

        with measure_time() as timer:
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self.transport
                ) as client:
                    response = await client.request(
                        method,
                        url,
                        params=params,
                        headers=propagation_headers(),
                    )
            except httpx.TimeoutException as e:
                return self._unreachable(method, url, f"timeout ({e})")
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                return self._unreachable(method, url, str(e) or repr(e))

        elapsed = timer["elapsed_ms"]

        if response.is_success:
            try:
                body = response.json() if response.content else None
            except ValueError as e:
                return self._unreachable(
                    method, url, f"malformed response ({e})"
                )
            logger.debug(
                f"Peer call succeeded: {method} {url} "
                f"| Status: {response.status_code} | Time: {elapsed:.2f}ms"
            )
            return PeerResult(
                service=self.service,
                status=PeerStatus.FOUND,
                status_code=response.status_code,
                body=body,
            )

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(
                f"Peer call returned 404: {method} {url} "
                f"| Time: {elapsed:.2f}ms"
            )
            return PeerResult(
                service=self.service,
                status=PeerStatus.NOT_FOUND,
                status_code=response.status_code,
            )

        logger.warning(
            f"Peer call rejected: {method} {url} "
            f"| Status: {response.status_code} | Time: {elapsed:.2f}ms"
        )
        return PeerResult(
            service=self.service,
            status=PeerStatus.REJECTED,
            status_code=response.status_code,
            error=response.text,
        )

    def _unreachable(self, method: str, url: str, cause: str) -> PeerResult:
        logger.error(f"Peer call failed: {method} {url} | Cause: {cause}")
        return PeerResult(
            service=self.service,
            status=PeerStatus.UNREACHABLE,
            error=cause,
        )


def raise_peer_failure(result: PeerResult) -> NoReturn:
    """REJECTED/UNREACHABLE 결과를 API 예외로 변환

    Raises:
        PeerUnavailableException: 전송 실패 (500)
        PeerRejectedException: 그 밖의 실패 응답 (404)
    """
    if result.status == PeerStatus.UNREACHABLE:
        raise PeerUnavailableException(
            service=result.service, cause=result.error or "unknown error"
        )
    raise PeerRejectedException(
        service=result.service, status_code=result.status_code
    )
