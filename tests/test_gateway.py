"""
Soisy order submission tests.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
import requests

from payments.config import GatewayConfig
from payments.errors import PaymentError, UnsupportedOperationError
from payments.soisy_gateway import SoisyGateway, to_cents
from core.urls import UrlBuilder


class MockResponse:
    """Stand-in for requests.Response."""

    def __init__(self, status_code, json_data=None, text=""):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text

    def json(self):
        if self._json_data is None:
            raise requests.JSONDecodeError("Expecting value", self.text, 0)
        return self._json_data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


@pytest.mark.parametrize(
    "total, expected",
    [
        (99, False),
        (Decimal("99.99"), False),
        (100, True),
        (500, True),
        (15000, True),
        (Decimal("15000.01"), False),
        (15001, False),
    ],
)
def test_available_for_use_bounds(gateway, total, expected):
    assert gateway.available_for_use(total) is expected


def test_available_for_use_custom_bounds(mock_settings):
    config = GatewayConfig.from_settings(mock_settings).model_copy(
        update={"min_amount": 50, "max_amount": 60}
    )
    gateway = SoisyGateway(config, UrlBuilder(mock_settings.SITE_URL))

    assert gateway.available_for_use(50)
    assert gateway.available_for_use(60)
    assert not gateway.available_for_use(100)


def test_available_for_use_with_order(gateway, make_order):
    assert gateway.available_for_use_with_order(make_order(total="500.00"))
    assert not gateway.available_for_use_with_order(make_order(total="20000.00"))


def test_to_cents():
    assert to_cents(Decimal("123.45")) == 12345
    assert to_cents(500) == 50000
    assert to_cents(0.29) == 29


def test_sandbox_resolves_endpoints(gateway_config):
    assert gateway_config.api_url == "https://api.sandbox.soisy.it/api"
    assert (
        gateway_config.orders_url
        == "https://api.sandbox.soisy.it/api/shops/partnershop/orders"
    )

    live = gateway_config.model_copy(update={"sandbox_enabled": False})
    assert live.orders_url == "https://api.soisy.it/api/shops/partnershop/orders"
    assert live.shop_url == "https://shop.soisy.it"


def test_build_order_payload(gateway, make_transaction):
    transaction = make_transaction(total="123.45")

    data = gateway.build_order_payload(transaction)

    assert data == {
        "email": "mario.rossi@example.com",
        "firstname": "Mario",
        "lastname": "Rossi",
        "amount": 12345,
        "city": "Milano",
        "address": "Via Roma 1",
        "postalCode": "20121",
        "successUrl": "https://shop.example.com/checkout/success",
        "errorUrl": "https://shop.example.com/checkout/cancel",
        "callbackUrl": "https://shop.example.com/api/v1/webhook/soisy?secret=whsec_test",
        "orderReference": transaction.hash,
    }


def test_build_order_payload_requires_billing_address(gateway, make_transaction):
    transaction = make_transaction(with_address=False)

    with pytest.raises(PaymentError, match="billing address"):
        gateway.build_order_payload(transaction)


@patch("payments.soisy_gateway.requests.post")
def test_purchase_posts_order(mock_post, gateway, make_transaction):
    transaction = make_transaction(total="500")
    mock_post.return_value = MockResponse(201, {"status": "ok"})

    response = gateway.purchase(transaction)

    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.sandbox.soisy.it/api/shops/partnershop/orders"
    assert kwargs["headers"] == {"X-Auth-Token": "partnerkey"}
    assert kwargs["timeout"] == 10.0
    assert kwargs["json"]["amount"] == 50000
    assert kwargs["json"]["orderReference"] == transaction.hash

    assert response.success is True
    assert response.code == 201
    assert response.transaction_hash == transaction.hash
    assert response.data["status"] == "ok"
    assert response.redirect_url is None


@patch("payments.soisy_gateway.requests.post")
def test_purchase_token_builds_redirect(mock_post, gateway, make_transaction):
    transaction = make_transaction()
    mock_post.return_value = MockResponse(201, {"token": "tok_abc"})

    response = gateway.purchase(transaction)

    assert response.is_redirect
    assert response.transaction_reference == "tok_abc"
    assert response.redirect_url == "https://shop.sandbox.soisy.it/tok_abc"


@patch("payments.soisy_gateway.requests.post")
def test_authorize_uses_same_order_call(mock_post, gateway, make_transaction):
    transaction = make_transaction()
    mock_post.return_value = MockResponse(201, {"token": "tok_abc"})

    authorized = gateway.authorize(transaction)
    purchased = gateway.purchase(transaction)

    assert mock_post.call_count == 2
    assert mock_post.call_args_list[0] == mock_post.call_args_list[1]
    assert authorized == purchased


@patch("payments.soisy_gateway.requests.post")
def test_purchase_forwards_provider_declared_failure(mock_post, gateway, make_transaction):
    transaction = make_transaction()
    mock_post.return_value = MockResponse(200, {"success": False, "message": "Shop disabled"})

    response = gateway.purchase(transaction)

    assert response.success is False
    assert response.message == "Shop disabled"
    assert response.transaction_hash == transaction.hash


@patch("payments.soisy_gateway.requests.post")
def test_transport_failure_raises_payment_error(mock_post, gateway, make_transaction):
    transaction = make_transaction()
    mock_post.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(PaymentError, match="connection refused"):
        gateway.purchase(transaction)


@patch("payments.soisy_gateway.requests.post")
def test_http_error_raises_payment_error(mock_post, gateway, make_transaction):
    transaction = make_transaction()
    mock_post.return_value = MockResponse(422, {"errors": {"amount": ["too low"]}})

    with pytest.raises(PaymentError, match="422"):
        gateway.purchase(transaction)


@patch("payments.soisy_gateway.requests.post")
def test_undecodable_body_raises_payment_error(mock_post, gateway, make_transaction):
    transaction = make_transaction()
    mock_post.return_value = MockResponse(201, None, text="<html>")

    with pytest.raises(PaymentError):
        gateway.purchase(transaction)


def test_capture_is_pass_through(gateway, make_transaction):
    transaction = make_transaction()

    response = gateway.capture(transaction)

    assert response.success is True
    assert response.transaction_hash == transaction.hash


@pytest.mark.parametrize(
    "operation, args",
    [
        ("complete_authorize", ("tx",)),
        ("complete_purchase", ("tx",)),
        ("create_payment_source", ({}, 1)),
        ("delete_payment_source", ("token",)),
        ("refund", ("tx",)),
    ],
)
def test_unsupported_operations(gateway, operation, args):
    with pytest.raises(UnsupportedOperationError) as exc_info:
        getattr(gateway, operation)(*args)

    assert exc_info.value.operation == operation
    assert isinstance(exc_info.value, NotImplementedError)


def test_capabilities(gateway):
    caps = gateway.capabilities
    assert caps.authorize and caps.capture and caps.purchase and caps.webhooks
    assert not (
        caps.refund
        or caps.partial_refund
        or caps.complete_authorize
        or caps.complete_purchase
        or caps.payment_sources
    )


@patch("payments.soisy_gateway.requests.post")
def test_status_code_and_hash_override_provider_keys(mock_post, gateway, make_transaction):
    transaction = make_transaction()
    mock_post.return_value = MockResponse(201, {"code": 999, "transactionHash": "other"})

    response = gateway.purchase(transaction)

    # The HTTP status and our own hash win over same-named keys in the body,
    # so the hash always round-trips unchanged.
    assert response.code == 201
    assert response.transaction_hash == transaction.hash
    assert response.data["transactionHash"] == transaction.hash
