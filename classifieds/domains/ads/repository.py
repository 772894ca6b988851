"""Ads 도메인 리포지토리"""

from sqlalchemy.ext.asyncio import AsyncSession

from classifieds.core.store import SqlAlchemyStore
from classifieds.domains.ads.models import Ad


class AdRepository(SqlAlchemyStore[Ad]):
    """광고 리포지토리"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Ad)
