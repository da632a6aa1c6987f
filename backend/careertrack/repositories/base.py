"""Repository base classes over an AsyncSession.

Handlers never build queries themselves; they go through a repository, and
every access to a user-owned record goes through ``OwnedRepository`` so the
ownership rule lives in one place.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careertrack.errors import AppError, ErrorKind, not_found
from careertrack.models.base import Base
from careertrack.services.locks import user_write_lock

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **values: Any) -> ModelT:
        record = self.model(**values)
        self.session.add(record)
        await self.session.flush()
        return record

    async def get(self, record_id: UUID) -> ModelT | None:
        return await self.session.get(self.model, record_id)

    async def update(self, record: ModelT, **values: Any) -> ModelT:
        for key, value in values.items():
            setattr(record, key, value)
        await self.session.flush()
        return record

    async def refresh(self, record: ModelT) -> ModelT:
        """Reload the record so checks made under a lock see committed state."""
        await self.session.refresh(record)
        return record

    async def delete(self, record: ModelT) -> None:
        await self.session.delete(record)
        await self.session.flush()

    @asynccontextmanager
    async def writing(self, owner_id: UUID) -> AsyncIterator[None]:
        """Serialize writes for one user and commit before releasing."""
        async with user_write_lock.hold(owner_id):
            try:
                yield
                await self.session.commit()
            except Exception:
                await self.session.rollback()
                raise


class OwnedRepository(Repository[ModelT]):
    """Repository for records that belong to exactly one user.

    A record owned by someone else is reported as missing, never as
    forbidden.
    """

    not_found_message = "Record not found."

    async def list_for_owner(self, owner_id: UUID) -> list[ModelT]:
        result = await self.session.execute(
            select(self.model).where(self.model.user_id == owner_id)
        )
        return list(result.scalars().all())

    async def get_owned(self, record_id: UUID, owner_id: UUID) -> ModelT:
        record = await self.get(record_id)
        if record is None:
            raise not_found(self.not_found_message)
        if record.user_id != owner_id:
            raise AppError(ErrorKind.AUTHORIZATION, self.not_found_message)
        return record

    async def update_owned(self, record_id: UUID, owner_id: UUID, **values: Any) -> ModelT:
        record = await self.get_owned(record_id, owner_id)
        return await self.update(record, **values)

    async def delete_owned(self, record_id: UUID, owner_id: UUID) -> ModelT:
        record = await self.get_owned(record_id, owner_id)
        await self.delete(record)
        return record
