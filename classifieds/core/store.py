"""Entity Store

서비스 하나가 소유한 엔티티 컬렉션에 대한 CRUD 추상화입니다.

- ``SqlAlchemyStore``: 데이터베이스 테이블 기반 (운영)
- ``InMemoryStore``: 프로세스 메모리 기반 (테스트, 로컬 개발)

두 구현 모두 잠금 없이 동작하며 동시 쓰기는 마지막 쓰기가 반영됩니다.
"""

from functools import lru_cache
from typing import Generic, Optional, Protocol, Sequence, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classifieds.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class EntityStore(Protocol[ModelT]):
    """엔티티 저장소 인터페이스"""

    async def find_all(self) -> Sequence[ModelT]: ...

    async def find_by_id(self, entity_id: int) -> Optional[ModelT]: ...

    async def save(self, entity: ModelT) -> ModelT: ...

    async def delete(self, entity: ModelT) -> None: ...

    async def delete_all(self, entities: Sequence[ModelT]) -> None: ...

    async def commit(self) -> None: ...


class SqlAlchemyStore(Generic[ModelT]):
    """SQLAlchemy 세션 기반 저장소"""

    def __init__(self, session: AsyncSession, model: type[ModelT]):
        self.session = session
        self.model = model

    async def find_all(self) -> Sequence[ModelT]:
        """전체 조회 (ID 오름차순)"""
        query = select(self.model).order_by(self.model.id)  # type: ignore[attr-defined]
        result = await self.session.execute(query)
        return cast(Sequence[ModelT], result.scalars().all())

    async def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        """ID로 조회

        Args:
            entity_id: 엔티티 ID

        Returns:
            엔티티 객체 또는 None
        """
        return await self.session.get(self.model, entity_id)

    async def save(self, entity: ModelT) -> ModelT:
        """생성 또는 수정

        ID가 없는 엔티티는 저장 시점에 데이터베이스가 ID를 부여합니다.
        """
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def delete_all(self, entities: Sequence[ModelT]) -> None:
        for entity in entities:
            await self.session.delete(entity)
        await self.session.flush()

    async def commit(self) -> None:
        """현재 트랜잭션 커밋

        응답을 보내기 전에 호출해야 다른 서비스가 변경 사항을 볼 수
        있습니다. 의존성 종료 시점의 커밋은 응답 전송 후에 실행됩니다.
        """
        await self.session.commit()


class InMemoryStore(Generic[ModelT]):
    """메모리 기반 저장소

    ID는 1부터 단조 증가하며 삭제된 ID는 재사용하지 않습니다.
    """

    def __init__(self) -> None:
        self._rows: dict[int, ModelT] = {}
        self._next_id = 1

    async def find_all(self) -> Sequence[ModelT]:
        return [self._rows[key] for key in sorted(self._rows)]

    async def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self._rows.get(entity_id)

    async def save(self, entity: ModelT) -> ModelT:
        entity_id = getattr(entity, "id", None)
        if entity_id is None:
            entity_id = self._next_id
            setattr(entity, "id", entity_id)
        self._next_id = max(self._next_id, entity_id + 1)
        self._rows[entity_id] = entity
        return entity

    async def delete(self, entity: ModelT) -> None:
        self._rows.pop(getattr(entity, "id"), None)

    async def delete_all(self, entities: Sequence[ModelT]) -> None:
        for entity in entities:
            await self.delete(entity)

    async def commit(self) -> None:
        # 쓰기가 즉시 반영되므로 커밋할 내용이 없음
        return None

    def clear(self) -> None:
        self._rows.clear()
        self._next_id = 1


@lru_cache
def get_memory_store(model: type[Base]) -> InMemoryStore:
    """모델별 프로세스 메모리 저장소 (STORAGE_BACKEND=memory 전용)"""
    return InMemoryStore()
