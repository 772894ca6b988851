"""데이터베이스 연결 관리

Users/Ads 서비스는 각자 독립된 데이터베이스(`DATABASE_URL`)를 사용하며
자신이 소유한 테이블만 생성합니다. 게이트웨이는 데이터베이스에 연결하지
않습니다. 엔진은 첫 연결 시점에 실제로 접속합니다.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Sequence

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from classifieds.core.config import settings

# 비동기 엔진 생성
engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
    pool_size=10,
    max_overflow=20,
)

# 비동기 세션 팩토리
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 모델 베이스 클래스"""

    pass


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 세션 (성공 시 commit, 예외 시 rollback)"""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(tables: Optional[Sequence[Table]] = None) -> None:
    """테이블 생성

    Args:
        tables: 생성할 테이블 목록 (None이면 전체). 각 서비스는 자신이
            소유한 테이블만 생성합니다.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, tables=tables)


async def close_db() -> None:
    """데이터베이스 연결 종료"""
    await engine.dispose()
