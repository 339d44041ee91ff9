from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.dependencies import get_gateway
from api.schemas import Capabilities
from db.models import Transaction
from db.session import get_db
from db.transactions import TransactionService
from payments.responses import SoisyResponse
from payments.soisy_gateway import SoisyGateway

router = APIRouter()


def get_transaction_or_404(transaction_hash: str, db: Session) -> Transaction:
    transaction = TransactionService(db).get_transaction_by_hash(transaction_hash)
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.get("/capabilities", response_model=Capabilities)
def capabilities(gateway: SoisyGateway = Depends(get_gateway)):
    return asdict(gateway.capabilities)


@router.post("/{transaction_hash}/purchase", response_model=SoisyResponse)
def purchase(
    transaction_hash: str,
    db: Session = Depends(get_db),
    gateway: SoisyGateway = Depends(get_gateway),
):
    return gateway.purchase(get_transaction_or_404(transaction_hash, db))


@router.post("/{transaction_hash}/authorize", response_model=SoisyResponse)
def authorize(
    transaction_hash: str,
    db: Session = Depends(get_db),
    gateway: SoisyGateway = Depends(get_gateway),
):
    return gateway.authorize(get_transaction_or_404(transaction_hash, db))


@router.post("/{transaction_hash}/capture", response_model=SoisyResponse)
def capture(
    transaction_hash: str,
    db: Session = Depends(get_db),
    gateway: SoisyGateway = Depends(get_gateway),
):
    return gateway.capture(get_transaction_or_404(transaction_hash, db))


@router.post("/{transaction_hash}/refund", response_model=SoisyResponse)
def refund(
    transaction_hash: str,
    db: Session = Depends(get_db),
    gateway: SoisyGateway = Depends(get_gateway),
):
    return gateway.refund(get_transaction_or_404(transaction_hash, db))
