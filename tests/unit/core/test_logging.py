"""로깅 포맷터/필터 테스트"""

import json
import logging
import sys

from classifieds.core.context import request_id_ctx
from classifieds.core.logging import JsonFormatter, RequestContextFilter


def make_record(msg: str = "Ad created", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="classifieds.domains.ads.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=None,
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


class TestRequestContextFilter:
    def test_adds_service_and_current_request_id(self):
        record = make_record()
        token = request_id_ctx.set("req-1")
        try:
            RequestContextFilter("ads").filter(record)
        finally:
            request_id_ctx.reset(token)

        assert record.service == "ads"
        assert record.request_id == "req-1"

    def test_placeholder_outside_request(self):
        record = make_record()

        RequestContextFilter("gateway").filter(record)

        assert record.request_id == "-"

    def test_explicit_request_id_is_kept(self):
        record = make_record(request_id="explicit")

        RequestContextFilter("users").filter(record)

        assert record.request_id == "explicit"


class TestJsonFormatter:
    def test_one_json_object_with_extra_fields(self):
        record = make_record('quote " inside', ad_id=7)
        RequestContextFilter("ads").filter(record)

        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == 'quote " inside'
        assert payload["service"] == "ads"
        assert payload["level"] == "INFO"
        assert payload["ad_id"] == 7

    def test_exception_is_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record(exc_info=sys.exc_info())

        payload = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in payload["exception"]
