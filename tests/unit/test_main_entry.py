"""서버 실행 진입점 테스트"""

from unittest.mock import patch

from classifieds import __main__ as entry
from classifieds.core.config import Settings


class TestServerEntry:
    def test_runs_uvicorn_with_configured_address(self):
        """HOST/PORT 설정으로 uvicorn 실행"""
        config = Settings(app_env="staging", host="127.0.0.1", port=8089)

        with patch.object(entry, "settings", config), patch.object(
            entry.uvicorn, "run"
        ) as mock_run:
            entry.main()

        mock_run.assert_called_once_with(
            "classifieds.main:app",
            host="127.0.0.1",
            port=8089,
            reload=False,
        )

    def test_reload_in_development(self):
        config = Settings(app_env="development")

        with patch.object(entry, "settings", config), patch.object(
            entry.uvicorn, "run"
        ) as mock_run:
            entry.main()

        assert mock_run.call_args.kwargs["reload"] is True
        assert mock_run.call_args.kwargs["port"] == config.port
