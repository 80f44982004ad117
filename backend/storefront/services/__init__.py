# Services package init
"""
Storefront Backend — Services Layer
=====================================

What:  Business logic between the routes (HTTP) and the repositories (persistence).
How:   Services take a repository and request data, apply the catalog rules,
       and return response schemas or raise application exceptions.

Service Inventory:
    - UploadService: image validation, naming, storage and deletion on disk
    - CatalogService: product list / fetch / create-with-images / update / delete
    - AssetService: standalone image records and blog uploads
    - seed_catalog: one-time sample catalog for an empty store
"""
