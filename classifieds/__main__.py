"""서버 실행 진입점

``python -m classifieds`` 또는 ``classifieds`` 명령으로 실행합니다.
담당 서비스는 ``SERVICE_ROLE`` 환경 변수로 정합니다.
"""

import uvicorn

from classifieds.core.config import settings


def main() -> None:
    uvicorn.run(
        "classifieds.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
