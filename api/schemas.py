"""
API Schemas Module

This module defines Pydantic models for request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from db.models import TransactionStatus, TransactionType


class TransactionOut(BaseModel):
    id: int
    hash: str
    parent_id: Optional[int] = None
    type: TransactionType
    status: TransactionStatus
    amount: Decimal
    currency: str
    reference: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None
    response: Optional[dict[str, Any]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderAvailability(BaseModel):
    order_id: int
    total: Decimal
    available: bool


class Capabilities(BaseModel):
    authorize: bool
    capture: bool
    complete_authorize: bool
    complete_purchase: bool
    payment_sources: bool
    purchase: bool
    refund: bool
    partial_refund: bool
    webhooks: bool
