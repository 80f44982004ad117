"""
Storefront Backend — API Routes Package
=========================================

Route Inventory:
    - products.py: GET/POST /api/products, GET/PUT/DELETE /api/products/{id}
    - images.py:   POST /api/uploads-blog, GET/POST /api/images,
                   DELETE /api/images/{id}
    - health.py:   GET /health

Routes stay thin: read the request, call a service, return its result.
"""
