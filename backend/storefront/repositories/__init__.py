from storefront.repositories.base import RecordRepository
from storefront.repositories.sql import SQLAlchemyRepository

__all__ = ["RecordRepository", "SQLAlchemyRepository"]
