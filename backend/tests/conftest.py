"""
Storefront Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the whole test suite.

Fixtures:
    ├── sample_jpeg_bytes / sample_png_bytes: tiny image payloads
    ├── make_upload: builds FastAPI UploadFile objects for service tests
    ├── product_repo / image_repo: in-memory RecordRepository fakes
    ├── upload_service: UploadService bound to a temporary directory
    └── test_client: HTTPX AsyncClient against the app on a SQLite database
"""

import asyncio
import io
import os
import shutil
import tempfile
import uuid
from datetime import datetime, timezone

# Point the app at throwaway storage BEFORE any storefront import
_TEST_ROOT = tempfile.mkdtemp(prefix="storefront_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/test.db"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from fastapi import UploadFile
from httpx import ASGITransport, AsyncClient
from sqlalchemy import inspect as sa_inspect
from starlette.datastructures import Headers

from storefront.config import settings
from storefront.repositories.base import RecordRepository
from storefront.services.upload_service import UploadService


# ══════════════════════════════════════════════════════════════════════════
# In-memory persistence fake
# ══════════════════════════════════════════════════════════════════════════

class InMemoryRepository(RecordRepository):
    """
    Dict-backed RecordRepository storing column snapshots, like a document
    store would. get() returns a fresh object each time, so two callers
    never share an instance.
    """

    def __init__(self, model):
        self.model = model
        self.records = {}
        self.put_log = []
        self.commits = 0

    def _snapshot(self, record) -> dict:
        return {
            attr.key: getattr(record, attr.key)
            for attr in sa_inspect(self.model).column_attrs
        }

    async def get(self, record_id):
        await asyncio.sleep(0)
        data = self.records.get(record_id)
        return self.model(**data) if data is not None else None

    async def put(self, record):
        if record.id is None:
            record.id = str(uuid.uuid4())
        if record.created_at is None:
            record.created_at = datetime.now(timezone.utc)
        await asyncio.sleep(0)
        snapshot = self._snapshot(record)
        self.records[record.id] = snapshot
        self.put_log.append(snapshot)
        return record

    async def delete(self, record_id):
        data = self.records.pop(record_id, None)
        return self.model(**data) if data is not None else None

    async def scan(self):
        return [self.model(**data) for data in self.records.values()]

    async def count(self):
        return len(self.records)

    async def commit(self):
        self.commits += 1


# ══════════════════════════════════════════════════════════════════════════
# Data fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_jpeg_bytes():
    """Minimal JPEG: SOI + JFIF header + EOI."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_png_bytes():
    """PNG signature followed by an IEND chunk."""
    return b'\x89PNG\r\n\x1a\n\x00\x00\x00\x00IEND\xaeB`\x82'


@pytest.fixture
def make_upload():
    """
    Factory for UploadFile objects as FastAPI would hand them to a route.

    Usage:
        upload = make_upload("front.jpg", b"...", "image/jpeg")
    """
    def _make(filename, content=b"\xff\xd8\xff\xd9", content_type="image/jpeg"):
        return UploadFile(
            file=io.BytesIO(content),
            filename=filename,
            size=len(content),
            headers=Headers({"content-type": content_type}),
        )
    return _make


@pytest.fixture
def product_repo():
    from storefront.models.product import Product
    return InMemoryRepository(Product)


@pytest.fixture
def image_repo():
    from storefront.models.image import Image
    return InMemoryRepository(Image)


@pytest.fixture
def temp_upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def upload_service(temp_upload_dir, monkeypatch):
    """
    UploadService writing to a temp directory, installed in every service
    module that uses the singleton.
    """
    service = UploadService(upload_dir=str(temp_upload_dir))
    monkeypatch.setattr("storefront.services.catalog_service.upload_service", service)
    monkeypatch.setattr("storefront.services.asset_service.upload_service", service)
    return service


# ══════════════════════════════════════════════════════════════════════════
# HTTP client against the real app
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def upload_dir():
    """The upload directory used by the app under test (from UPLOAD_DIR)."""
    return settings.upload_dir


@pytest_asyncio.fixture
async def test_client(upload_dir):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Tables are created before and dropped after each test; the upload
    directory is emptied. The lifespan does not run under ASGITransport,
    so nothing is seeded.
    """
    from storefront.database import Base, create_tables, engine
    from storefront.main import app

    os.makedirs(upload_dir, exist_ok=True)
    await create_tables()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
    shutil.rmtree(upload_dir, ignore_errors=True)
