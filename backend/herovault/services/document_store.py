"""
HeroVault Backend - Document Store
===================================

What:  Single-record persistence operations for one ORM model.
How:   Each operation opens its own AsyncSession, performs exactly one
       logical store call inside a transaction, and returns the affected
       record (or None when the identifier does not resolve).
Who:   Constructed by the app factory and injected into each RecordService.
When:  One store per entity per application instance.

Operations:
    insert(fields)                     → record
    find_all()                         → [record, ...] in insertion order
    find_by_id(id)                     → record | None
    find_and_update_by_id(id, changes) → record | None
    find_and_delete_by_id(id)          → record | None (last known state)

Failure Handling:
    SQLAlchemy errors and timeouts are wrapped in StoreError with the
    underlying error text in `context["error"]`. Nothing is retried.
    Malformed identifiers are treated like unknown ones (None).
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from herovault.exceptions import StoreError
from herovault.models.record import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
ResultT = TypeVar("ResultT")


def parse_record_id(record_id: Any) -> Optional[uuid.UUID]:
    """Coerce a path identifier into a UUID; None if it is not one."""
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(str(record_id))
    except (ValueError, TypeError, AttributeError):
        return None


class DocumentStore(Generic[ModelT]):
    """
    Record store for a single table.

    Args:
        session_factory: Produces AsyncSession instances bound to the engine.
        model:           The ORM class whose table this store manages.
        timeout:         Seconds allowed for each store call.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: Type[ModelT],
        timeout: float = 10.0,
    ):
        self._session_factory = session_factory
        self.model = model
        self.timeout = timeout

    @property
    def collection(self) -> str:
        return self.model.__tablename__

    async def _run(
        self,
        operation: str,
        call: Callable[[AsyncSession], Awaitable[ResultT]],
    ) -> ResultT:
        """
        Run one store call in a fresh session, bounded by the timeout.

        Raises:
            StoreError: The database rejected the call or it timed out.
        """

        async def _in_session() -> ResultT:
            async with self._session_factory() as session:
                async with session.begin():
                    return await call(session)

        try:
            return await asyncio.wait_for(_in_session(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(
                "Store %s on %s timed out after %.1fs", operation, self.collection, self.timeout
            )
            raise StoreError(
                message=f"The {operation} operation timed out. Please try again.",
                context={
                    "error": f"Timed out after {self.timeout}s",
                    "operation": operation,
                    "collection": self.collection,
                },
            )
        except SQLAlchemyError as e:
            logger.error(
                "Store %s on %s failed: %s", operation, self.collection, str(e), exc_info=True
            )
            raise StoreError(
                message=f"The {operation} operation failed",
                context={
                    "error": str(getattr(e, "orig", None) or e),
                    "error_type": type(e).__name__,
                    "operation": operation,
                    "collection": self.collection,
                },
            ) from e

    async def insert(self, fields: Dict[str, Any]) -> ModelT:
        async def call(session: AsyncSession) -> ModelT:
            record = self.model(**fields)
            session.add(record)
            await session.flush()
            return record

        return await self._run("insert", call)

    async def find_all(self) -> List[ModelT]:
        async def call(session: AsyncSession) -> List[ModelT]:
            result = await session.execute(
                select(self.model).order_by(self.model.created_at.asc())
            )
            return list(result.scalars().all())

        return await self._run("find", call)

    async def find_by_id(self, record_id: Any) -> Optional[ModelT]:
        key = parse_record_id(record_id)
        if key is None:
            return None

        async def call(session: AsyncSession) -> Optional[ModelT]:
            return await session.get(self.model, key)

        return await self._run("find", call)

    async def find_and_update_by_id(
        self, record_id: Any, changes: Dict[str, Any]
    ) -> Optional[ModelT]:
        """
        Overwrite the given columns on one record.

        Columns not named in `changes` keep their stored values. The
        identifier and created_at are never touched.
        """
        key = parse_record_id(record_id)
        if key is None:
            return None

        async def call(session: AsyncSession) -> Optional[ModelT]:
            record = await session.get(self.model, key)
            if record is None:
                return None
            for column, value in changes.items():
                if column in ("id", "created_at"):
                    continue
                setattr(record, column, value)
            record.updated_at = utcnow()
            await session.flush()
            return record

        return await self._run("update", call)

    async def find_and_delete_by_id(self, record_id: Any) -> Optional[ModelT]:
        key = parse_record_id(record_id)
        if key is None:
            return None

        async def call(session: AsyncSession) -> Optional[ModelT]:
            record = await session.get(self.model, key)
            if record is None:
                return None
            await session.delete(record)
            await session.flush()
            return record

        return await self._run("delete", call)

    async def ping(self) -> None:
        """Lightweight round-trip used by the health check."""

        async def call(session: AsyncSession) -> None:
            await session.execute(text("SELECT 1"))

        await self._run("ping", call)
