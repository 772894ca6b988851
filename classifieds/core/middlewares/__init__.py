"""미들웨어 모듈"""

from classifieds.core.middlewares.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
