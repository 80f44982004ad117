"""
Storefront Backend — Abstract Record Repository
=================================================

What:  The persistence port used by every service: a key-indexed record store.
Why:   Services only need get / put / delete / scan by id. Keeping that behind
       an interface lets the SQL backend be swapped (or faked in tests)
       without touching CatalogService or AssetService.
How:   Concrete implementations inherit from RecordRepository.
       SQLAlchemyRepository (repositories/sql.py) is the production one.

Contract:
    get(id)      → record or None (malformed ids are simply "not found")
    put(record)  → insert or replace; assigns id / defaults on first write
    delete(id)   → the removed record, or None if nothing matched
    scan()       → every record, oldest first (ties broken by id)
    count()      → number of records
    commit()     → make pending writes durable now

    Writes become durable when the request's unit of work commits, or
    earlier when a service calls commit() explicitly.
    All methods raise DatabaseError on store failure.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

RecordT = TypeVar("RecordT")


class RecordRepository(ABC, Generic[RecordT]):
    """Abstract key-indexed repository for one record type."""

    @abstractmethod
    async def get(self, record_id: str) -> Optional[RecordT]:
        ...

    @abstractmethod
    async def put(self, record: RecordT) -> RecordT:
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> Optional[RecordT]:
        ...

    @abstractmethod
    async def scan(self) -> List[RecordT]:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...
