# gst_billing/api/v1/__init__.py
"""
Versioned API v1 — aggregates all sub-routers under ``settings.API_PREFIX``.

Usage in ``main.py``::

    from gst_billing.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from gst_billing.api.v1.routes.tax import router as tax_router
from gst_billing.config.settings import settings

v1_router = APIRouter(prefix=settings.API_PREFIX)

v1_router.include_router(tax_router)

__all__ = ["v1_router"]
