"""Users 도메인 모듈

사용자 생명주기를 소유하는 User 서비스입니다.

구조:
    - models.py: SQLAlchemy 모델 정의 (User)
    - schemas.py: Pydantic 스키마 (UserCreate, UserUpdate, UserResponse)
    - repository.py: 데이터 접근 계층
    - service.py: 비즈니스 로직 (광고 연쇄 삭제 포함)
    - router.py: API 엔드포인트
    - exceptions.py: 도메인 예외
"""

from classifieds.domains.users.exceptions import (
    CascadeFailedException,
    UserErrorCode,
    UserNotFoundException,
)
from classifieds.domains.users.models import User
from classifieds.domains.users.router import router
from classifieds.domains.users.schemas import (
    UserCreate,
    UserResponse,
    UserUpdate,
)
from classifieds.domains.users.service import UserService

__all__ = [
    "User",
    "UserService",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "router",
    "UserErrorCode",
    "UserNotFoundException",
    "CascadeFailedException",
]
