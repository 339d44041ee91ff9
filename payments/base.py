"""
Gateway capability interfaces.

A gateway implements OrderSubmitter for checkout, WebhookHandler for
asynchronous provider notifications, and describes what else it can do
with a CapabilityDescriptor.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping

from db.models import Transaction
from payments.responses import SoisyResponse


@dataclass(frozen=True)
class CapabilityDescriptor:
    authorize: bool = False
    capture: bool = False
    complete_authorize: bool = False
    complete_purchase: bool = False
    payment_sources: bool = False
    purchase: bool = False
    refund: bool = False
    partial_refund: bool = False
    webhooks: bool = False


class OrderSubmitter(ABC):
    @abstractmethod
    def authorize(self, transaction: Transaction) -> SoisyResponse:
        """Start an authorize-style checkout for a pending transaction."""

    @abstractmethod
    def purchase(self, transaction: Transaction) -> SoisyResponse:
        """Start a purchase-style checkout for a pending transaction."""


class WebhookHandler(ABC):
    @abstractmethod
    def process_webhook(
        self, params: Mapping[str, Any], secret: str | None
    ) -> Transaction | None:
        """Record the effect of one provider notification."""
