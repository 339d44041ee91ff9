"""
API Routes Package

This module consolidates all API routes for the Soisy gateway.
"""

from fastapi import APIRouter

from api import webhooks

from . import orders
from . import payments

# Create main router
router = APIRouter()

# Include all route modules
router.include_router(payments.router, prefix="/payments", tags=["payments"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(webhooks.router, tags=["webhooks"])

# Export for use in main application
__all__ = ["router"]
