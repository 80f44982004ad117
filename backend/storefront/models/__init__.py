"""SQLAlchemy models for the catalog (Product) and asset store (Image)."""
