"""
Storefront Backend — Application Package Initializer
=====================================================

What: Marks the `storefront` directory as a Python package.
Who:  Imported by uvicorn (`storefront.main:app`), Alembic and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Catalog, Asset, Upload) │  ← Business rules
    ├─────────────────────────────────────┤
    │   Repositories (Persistence port)   │  ← get / put / delete / scan
    ├─────────────────────────────────────┤
    │   Models (SQLAlchemy) + Blob store  │  ← Database rows, files on disk
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
