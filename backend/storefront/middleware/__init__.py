"""
Storefront Backend — Middleware Package
========================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first so every later log line can be correlated
    2. Logging measures the full handler duration and final status
"""
