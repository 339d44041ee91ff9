"""
Transaction store backed by the SQLAlchemy session.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import (
    Order,
    Transaction,
    TransactionStatus,
    TransactionType,
    generate_hash,
)


class TransactionService:
    def __init__(self, db: Session):
        self.db = db

    def get_transaction_by_hash(self, hash: str | None) -> Transaction | None:
        if not hash:
            return None
        return self.db.execute(
            select(Transaction).where(Transaction.hash == hash)
        ).scalar_one_or_none()

    def get_successful_child(self, parent: Transaction) -> Transaction | None:
        return (
            self.db.execute(
                select(Transaction).where(
                    Transaction.parent_id == parent.id,
                    Transaction.status == TransactionStatus.success,
                )
            )
            .scalars()
            .first()
        )

    def create_transaction(
        self,
        order: Order | None = None,
        parent: Transaction | None = None,
        type: TransactionType | None = None,
    ) -> Transaction:
        """
        Build an unsaved transaction.

        Children inherit order, amount and currency from their parent and
        start out pending like any new transaction.
        """
        if parent is None and order is None:
            raise ValueError("A transaction needs an order or a parent transaction")

        if parent is not None:
            order = parent.order

        return Transaction(
            hash=generate_hash(),
            order=order,
            parent=parent,
            type=type or (parent.type if parent is not None else TransactionType.purchase),
            status=TransactionStatus.pending,
            amount=parent.amount if parent is not None else order.total,
            currency=parent.currency if parent is not None else order.currency,
        )

    def save_transaction(self, transaction: Transaction) -> Transaction:
        self.db.add(transaction)
        self.db.commit()
        self.db.refresh(transaction)
        return transaction
