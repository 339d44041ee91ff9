"""
Webhook handlers for payment providers
"""

import json
from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from api.dependencies import get_gateway_config
from db.session import get_db
from db.transactions import TransactionService
from payments.config import GatewayConfig
from payments.errors import WebhookAuthenticationError
from payments.soisy_webhook import SoisyCallbackProcessor

router = APIRouter()

SECRET_HEADER = "X-Soisy-Webhook-Secret"

log = structlog.get_logger(__name__)


async def read_body_params(request: Request) -> dict[str, Any]:
    """Soisy posts form-encoded bodies; JSON is accepted as well."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            log.warning("webhook.invalid_json")
            return {}
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


@router.post("/webhook/soisy")
async def soisy_webhook(
    request: Request,
    secret: str | None = None,
    db: Session = Depends(get_db),
    config: GatewayConfig = Depends(get_gateway_config),
):
    params = await read_body_params(request)
    processor = SoisyCallbackProcessor(config, TransactionService(db))

    try:
        processor.process_webhook(params, secret or request.headers.get(SECRET_HEADER))
    except WebhookAuthenticationError:
        raise HTTPException(status_code=401, detail="Invalid webhook secret")

    # Soisy redelivers on anything but 2xx
    return Response(status_code=200)
