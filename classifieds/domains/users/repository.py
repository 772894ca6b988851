"""Users 도메인 리포지토리"""

from sqlalchemy.ext.asyncio import AsyncSession

from classifieds.core.store import SqlAlchemyStore
from classifieds.domains.users.models import User


class UserRepository(SqlAlchemyStore[User]):
    """사용자 리포지토리"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, User)
