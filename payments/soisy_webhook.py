"""
Soisy webhook processing.

Every notification becomes a new child transaction under the transaction
that started the checkout. Soisy redelivers until it gets a 2xx, so the
processor never raises for unknown references or repeated terminal events.
"""

import hmac
from typing import Any, Mapping

import structlog

from core.i18n import translate_event_message
from core.logging import BusinessEvents
from core.metrics import webhook_events_total
from db.models import Transaction, TransactionStatus
from db.transactions import TransactionService
from payments.base import WebhookHandler
from payments.config import GatewayConfig
from payments.errors import WebhookAuthenticationError

EVENT_STATUSES = {
    "LoanWasApproved": TransactionStatus.pending,
    "RequestCompleted": TransactionStatus.pending,
    "LoanWasVerified": TransactionStatus.processing,
    "LoanWasDisbursed": TransactionStatus.success,
    "UserWasRejected": TransactionStatus.failed,
}


def text_field(value: Any) -> str | None:
    """Scalar body fields as strings; lists, objects and blanks become None."""
    if value is None or isinstance(value, (dict, list)):
        return None
    value = str(value)
    return value or None


def event_label(event_id: str | None) -> str:
    # Caller-supplied ids must not create new label sets.
    return event_id if event_id in EVENT_STATUSES else "unknown"


class SoisyCallbackProcessor(WebhookHandler):
    def __init__(self, config: GatewayConfig, transactions: TransactionService):
        self.config = config
        self.transactions = transactions

    def verify_secret(self, secret: str | None) -> bool:
        if not secret or not self.config.webhook_secret:
            return False
        return hmac.compare_digest(
            secret.encode("utf-8"), self.config.webhook_secret.encode("utf-8")
        )

    def process_webhook(
        self, params: Mapping[str, Any], secret: str | None
    ) -> Transaction | None:
        """
        Record one Soisy notification.

        Returns the saved child transaction, or None when the notification
        was acknowledged without a write (unknown reference, or the parent
        already has a successful child).

        Raises:
            WebhookAuthenticationError: the shared secret is missing or wrong
        """
        # Get a fresh logger each time to ensure test configurations are respected
        log = structlog.get_logger(__name__)

        transaction_hash = text_field(params.get("orderReference"))
        event_id = text_field(params.get("eventId"))
        label = event_label(event_id)

        if not self.verify_secret(secret):
            log.warning(
                BusinessEvents.WEBHOOK_REJECTED,
                transaction_hash=transaction_hash,
                event_id=event_id,
            )
            webhook_events_total.labels(event_id=label, outcome="rejected").inc()
            raise WebhookAuthenticationError("Invalid webhook secret")

        log.info(
            BusinessEvents.WEBHOOK_RECEIVED,
            transaction_hash=transaction_hash,
            event_id=event_id,
        )

        transaction = self.transactions.get_transaction_by_hash(transaction_hash)
        if transaction is None:
            log.warning(
                BusinessEvents.WEBHOOK_UNKNOWN_TRANSACTION,
                transaction_hash=transaction_hash,
                event_id=event_id,
            )
            webhook_events_total.labels(
                event_id=label, outcome="unknown_transaction"
            ).inc()
            return None

        if self.transactions.get_successful_child(transaction) is not None:
            log.warning(
                BusinessEvents.WEBHOOK_DUPLICATE_SUCCESS,
                transaction_hash=transaction_hash,
                event_id=event_id,
            )
            webhook_events_total.labels(event_id=label, outcome="duplicate").inc()
            return None

        order = transaction.order
        if not order.is_completed:
            order.mark_as_complete()

        child = self.transactions.create_transaction(
            parent=transaction, type=transaction.type
        )

        # Unknown events are recorded with the default status.
        status = EVENT_STATUSES.get(event_id)
        if status is not None:
            child.status = status

        child.code = event_id
        child.message = translate_event_message(
            text_field(params.get("eventMessage")), event_id, self.config.locale
        )
        child.response = dict(params)
        child.reference = text_field(params.get("orderToken"))

        self.transactions.save_transaction(child)

        log.info(
            BusinessEvents.WEBHOOK_PROCESSED,
            transaction_hash=transaction_hash,
            child_hash=child.hash,
            event_id=event_id,
            status=child.status.value,
        )
        webhook_events_total.labels(event_id=label, outcome="recorded").inc()
        return child
