"""
Soisy Gateway

Creates Soisy installment-loan orders for pending commerce transactions.
Authorize and purchase share a single order-creation call: Soisy does not
distinguish the two flows.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import requests
import structlog

from core.logging import BusinessEvents
from core.metrics import orders_total
from core.urls import UrlBuilder
from db.models import Order, Transaction
from payments.base import CapabilityDescriptor, OrderSubmitter
from payments.config import GatewayConfig
from payments.errors import PaymentError, UnsupportedOperationError
from payments.responses import SoisyResponse

log = structlog.get_logger(__name__)


def to_cents(total) -> int:
    """Soisy expects integer cents."""
    return int(
        (Decimal(str(total)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )


class SoisyGateway(OrderSubmitter):
    capabilities = CapabilityDescriptor(
        authorize=True,
        capture=True,
        purchase=True,
        webhooks=True,
    )

    def __init__(self, config: GatewayConfig, urls: UrlBuilder):
        self.config = config
        self.urls = urls

    def is_sandbox_enabled(self) -> bool:
        return bool(self.config.sandbox_enabled)

    def available_for_use(self, total) -> bool:
        total = Decimal(str(total))
        return (
            Decimal(str(self.config.min_amount))
            <= total
            <= Decimal(str(self.config.max_amount))
        )

    def available_for_use_with_order(self, order: Order) -> bool:
        return self.available_for_use(order.total)

    def build_order_payload(self, transaction: Transaction) -> dict[str, Any]:
        order = transaction.order
        address = order.billing_address
        if address is None:
            raise PaymentError(f"Order {order.number} has no billing address")

        return {
            "email": order.email,
            "firstname": address.first_name,
            "lastname": address.last_name,
            "amount": to_cents(order.total),
            "city": address.city,
            "address": address.address1,
            "postalCode": address.zip_code,
            "successUrl": self.urls.url(order.return_url),
            "errorUrl": self.urls.url(order.cancel_url),
            "callbackUrl": self.urls.webhook_url(self.config.webhook_secret),
            "orderReference": transaction.hash,
        }

    def authorize(self, transaction: Transaction) -> SoisyResponse:
        return self._create_order(transaction)

    def purchase(self, transaction: Transaction) -> SoisyResponse:
        return self._create_order(transaction)

    def capture(self, transaction: Transaction, reference: str | None = None) -> SoisyResponse:
        # Soisy funds the loan on its own; nothing to capture remotely.
        return SoisyResponse.from_payload(
            {"success": True, "transactionHash": transaction.hash}
        )

    def complete_authorize(self, transaction: Transaction) -> SoisyResponse:
        self._unsupported("complete_authorize")

    def complete_purchase(self, transaction: Transaction) -> SoisyResponse:
        self._unsupported("complete_purchase")

    def create_payment_source(self, source_data: dict[str, Any], user_id: int):
        self._unsupported("create_payment_source")

    def delete_payment_source(self, token: str) -> bool:
        self._unsupported("delete_payment_source")

    def refund(self, transaction: Transaction) -> SoisyResponse:
        self._unsupported("refund")

    def _create_order(self, transaction: Transaction) -> SoisyResponse:
        data = self.build_order_payload(transaction)

        log.info(
            BusinessEvents.PAYMENT_ATTEMPT,
            transaction_hash=transaction.hash,
            amount=data["amount"],
            sandbox=self.is_sandbox_enabled(),
        )

        try:
            api_response = requests.post(
                self.config.orders_url,
                json=data,
                headers={"X-Auth-Token": self.config.auth_token},
                timeout=self.config.timeout,
            )
            api_response.raise_for_status()
            payload = api_response.json()
        except (requests.RequestException, ValueError) as e:
            log.error(
                BusinessEvents.PAYMENT_FAILURE,
                transaction_hash=transaction.hash,
                error=str(e),
            )
            orders_total.labels(outcome="error").inc()
            raise PaymentError(str(e)) from e

        if not isinstance(payload, dict):
            payload = {"data": payload}

        response = SoisyResponse.from_payload(
            {
                **payload,
                "code": api_response.status_code,
                "transactionHash": transaction.hash,
            },
            shop_url=self.config.shop_url,
        )

        if response.success:
            log.info(
                BusinessEvents.PAYMENT_SUCCESS,
                transaction_hash=transaction.hash,
                code=response.code,
                token=response.transaction_reference,
            )
            orders_total.labels(outcome="success").inc()
        else:
            log.warning(
                BusinessEvents.PAYMENT_FAILURE,
                transaction_hash=transaction.hash,
                code=response.code,
                message=response.message,
            )
            orders_total.labels(outcome="failure").inc()

        return response

    def _unsupported(self, operation: str):
        log.warning(BusinessEvents.PAYMENT_UNSUPPORTED, operation=operation)
        raise UnsupportedOperationError(operation)
