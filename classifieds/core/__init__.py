"""Core 모듈"""

from classifieds.core.config import settings
from classifieds.core.database import Base, session_scope
from classifieds.core.exceptions import (
    BaseAPIException,
    ErrorCode,
    InternalServerException,
    NotFoundException,
    PeerRejectedException,
    PeerUnavailableException,
)
from classifieds.core.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "Base",
    "session_scope",
    "ErrorCode",
    "BaseAPIException",
    "NotFoundException",
    "InternalServerException",
    "PeerRejectedException",
    "PeerUnavailableException",
    "get_logger",
    "setup_logging",
]
