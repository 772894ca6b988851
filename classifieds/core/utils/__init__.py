"""유틸리티 모듈"""

from classifieds.core.utils.datetime import UTC, now_utc
from classifieds.core.utils.time import measure_time

__all__ = [
    "UTC",
    "now_utc",
    "measure_time",
]
