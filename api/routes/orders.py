from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.dependencies import get_gateway
from api.schemas import OrderAvailability, TransactionOut
from db.models import Order, Transaction
from db.session import get_db
from payments.soisy_gateway import SoisyGateway

router = APIRouter()


def get_order_or_404(order_id: int, db: Session) -> Order:
    order = db.get(Order, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/{order_id}/availability", response_model=OrderAvailability)
def availability(
    order_id: int,
    db: Session = Depends(get_db),
    gateway: SoisyGateway = Depends(get_gateway),
):
    """Whether Soisy can finance this order's total."""
    order = get_order_or_404(order_id, db)
    return OrderAvailability(
        order_id=order.id,
        total=order.total,
        available=gateway.available_for_use_with_order(order),
    )


@router.get("/{order_id}/transactions", response_model=list[TransactionOut])
def transactions(order_id: int, db: Session = Depends(get_db)):
    order = get_order_or_404(order_id, db)
    return order.transactions.order_by(Transaction.id).all()
