"""Users 도메인 예외 정의"""

from enum import Enum

from classifieds.core.exceptions import (
    InternalServerException,
    NotFoundException,
)

USER_ERROR_TITLE = "User error"


class UserErrorCode(str, Enum):
    """사용자 도메인 에러 코드"""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    CASCADE_FAILED = "CASCADE_FAILED"


class UserNotFoundException(NotFoundException):
    """사용자를 찾을 수 없는 경우"""

    def __init__(self, user_id: int | None = None):
        detail = {"user_id": user_id} if user_id is not None else {}
        super().__init__(
            message=f"ID가 {user_id}인 사용자를 찾을 수 없습니다.",
            error_code=UserErrorCode.USER_NOT_FOUND,
            detail=detail,
            title=USER_ERROR_TITLE,
        )


class CascadeFailedException(InternalServerException):
    """사용자 삭제 전 연관 광고 삭제에 실패한 경우

    이 예외가 발생하면 사용자 레코드는 삭제되지 않습니다.
    """

    def __init__(self, user_id: int, reason: str):
        super().__init__(
            message=f"사용자 {user_id}의 광고 삭제에 실패했습니다: {reason}",
            error_code=UserErrorCode.CASCADE_FAILED,
            detail={"user_id": user_id, "reason": reason},
            title=USER_ERROR_TITLE,
        )
