"""
Storefront Backend — SQLAlchemy Record Repository
===================================================

What:  RecordRepository backed by an AsyncSession and one ORM model class.
How:   Thin wrappers over session.get / add / delete / select. Every
       SQLAlchemyError is logged and re-raised as DatabaseError so the
       global handler answers 500 without leaking driver details.
Who:   Built per request by the FastAPI dependencies in routes/deps.py.
"""

import logging
from typing import List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import DatabaseError
from storefront.repositories.base import RecordRepository, RecordT

logger = logging.getLogger(__name__)


class SQLAlchemyRepository(RecordRepository[RecordT]):
    """Repository over a single mapped model class."""

    def __init__(self, session: AsyncSession, model: Type[RecordT]):
        self.session = session
        self.model = model
        self._resource = model.__tablename__

    def _wrap(self, operation: str, exc: Exception, **context) -> DatabaseError:
        logger.error(
            "Database error during %s on %s: %s",
            operation,
            self._resource,
            str(exc),
        )
        return DatabaseError(
            context={"operation": operation, "table": self._resource, **context},
        )

    async def get(self, record_id: str) -> Optional[RecordT]:
        try:
            return await self.session.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._wrap("get", e, record_id=record_id)

    async def put(self, record: RecordT) -> RecordT:
        try:
            self.session.add(record)
            # Flush assigns the id and column defaults without committing
            await self.session.flush()
            return record
        except SQLAlchemyError as e:
            raise self._wrap("put", e)

    async def delete(self, record_id: str) -> Optional[RecordT]:
        try:
            record = await self.session.get(self.model, record_id)
            if record is None:
                return None
            await self.session.delete(record)
            await self.session.flush()
            return record
        except SQLAlchemyError as e:
            raise self._wrap("delete", e, record_id=record_id)

    async def scan(self) -> List[RecordT]:
        try:
            result = await self.session.execute(
                select(self.model).order_by(self.model.created_at, self.model.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._wrap("scan", e)

    async def count(self) -> int:
        try:
            result = await self.session.execute(
                select(func.count()).select_from(self.model)
            )
            return result.scalar() or 0
        except SQLAlchemyError as e:
            raise self._wrap("count", e)

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise self._wrap("commit", e)
