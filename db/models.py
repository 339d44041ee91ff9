"""
Database Models Module

This module defines SQLAlchemy ORM models for the commerce ledger the
gateway works against:
- Billing addresses
- Orders
- Payment transactions (parent/child history)
"""

import uuid
from datetime import UTC, datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def generate_hash() -> str:
    return uuid.uuid4().hex


class Address(Base):
    """Model representing a billing address."""

    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(255))
    last_name = Column(String(255))
    address1 = Column(String(255))
    city = Column(String(255))
    zip_code = Column(String(32))


class Order(Base):
    """Model representing a customer order."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    number = Column(String(32), nullable=False, unique=True, default=generate_hash)
    email = Column(String(255))
    total = Column(Numeric(14, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="EUR")
    return_url = Column(String(255))
    cancel_url = Column(String(255))
    is_completed = Column(Boolean, nullable=False, default=False)
    date_ordered = Column(DateTime)
    billing_address_id = Column(Integer, ForeignKey("addresses.id"))

    billing_address = relationship("Address")
    transactions = relationship("Transaction", back_populates="order", lazy="dynamic")

    def mark_as_complete(self) -> bool:
        """Mark the order as completed. Returns False if it already was."""
        if self.is_completed:
            return False
        self.is_completed = True
        self.date_ordered = datetime.now(UTC)
        return True

    def __repr__(self):
        return f"<Order(id={self.id}, number={self.number}, completed={self.is_completed})>"


class TransactionType(PyEnum):
    authorize = "authorize"
    purchase = "purchase"
    capture = "capture"
    refund = "refund"


class TransactionStatus(PyEnum):
    pending = "pending"
    processing = "processing"
    success = "success"
    failed = "failed"


class Transaction(Base):
    """Model representing payment transactions."""

    __tablename__ = "transactions"
    __table_args__ = (Index("ix_transactions_parent_status", "parent_id", "status"),)

    id = Column(Integer, primary_key=True)
    hash = Column(String(32), nullable=False, unique=True, index=True, default=generate_hash)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    parent_id = Column(Integer, ForeignKey("transactions.id"))
    type = Column(Enum(TransactionType), nullable=False, default=TransactionType.purchase)
    status = Column(
        Enum(TransactionStatus), nullable=False, default=TransactionStatus.pending
    )
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="EUR")
    reference = Column(String(255))
    code = Column(String(255))
    message = Column(Text)
    response = Column(JSON)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(UTC))

    order = relationship("Order", back_populates="transactions")
    parent = relationship("Transaction", remote_side=[id], back_populates="children")
    children = relationship("Transaction", back_populates="parent")

    def __repr__(self):
        return (
            f"<Transaction(id={self.id}, hash={self.hash}, "
            f"parent_id={self.parent_id}, status={self.status})>"
        )
