"""Test configuration and fixtures."""

import os
from decimal import Decimal
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.settings import Settings
from core.urls import UrlBuilder
from db.models import Address, Base, Order, Transaction, TransactionType
from main import app
from payments.config import GatewayConfig
from payments.soisy_gateway import SoisyGateway

TEST_ENV = {
    "DATABASE_URL": "sqlite:///:memory:",
    "SOISY_SHOP_ID": "partnershop",
    "SOISY_AUTH_TOKEN": "partnerkey",
    "SOISY_WEBHOOK_SECRET": "whsec_test",
    "SOISY_SANDBOX_ENABLED": "true",
    "SITE_URL": "https://shop.example.com",
    "APP_NAME": "Test Gateway",
    "ENVIRONMENT": "development",
    "DISABLE_TRACING": "true",
    "DEBUG": "true",
}


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    original_env = dict(os.environ)
    os.environ.update(TEST_ENV)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_settings():
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        SOISY_SHOP_ID="partnershop",
        SOISY_AUTH_TOKEN="partnerkey",
        SOISY_WEBHOOK_SECRET="whsec_test",
        SOISY_SANDBOX_ENABLED=True,
        SITE_URL="https://shop.example.com",
        APP_NAME="Test Gateway",
        DEBUG=True,
        ENVIRONMENT="development",
    )


@pytest.fixture
def gateway_config(mock_settings):
    return GatewayConfig.from_settings(mock_settings)


@pytest.fixture
def gateway(gateway_config, mock_settings):
    return SoisyGateway(gateway_config, UrlBuilder(mock_settings.SITE_URL))


@pytest.fixture
def test_db_engine():
    """Create a test database engine and setup tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def test_db_session(test_db_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_order(test_db_session):
    def _make_order(total="500.00", with_address=True, **kwargs):
        address = None
        if with_address:
            address = Address(
                first_name="Mario",
                last_name="Rossi",
                address1="Via Roma 1",
                city="Milano",
                zip_code="20121",
            )
        order = Order(
            email="mario.rossi@example.com",
            total=Decimal(total),
            return_url="/checkout/success",
            cancel_url="/checkout/cancel",
            billing_address=address,
            **kwargs,
        )
        test_db_session.add(order)
        test_db_session.commit()
        return order

    return _make_order


@pytest.fixture
def make_transaction(test_db_session, make_order):
    def _make_transaction(order=None, type=TransactionType.purchase, **order_kwargs):
        order = order or make_order(**order_kwargs)
        transaction = Transaction(
            order=order, type=type, amount=order.total, currency=order.currency
        )
        test_db_session.add(transaction)
        test_db_session.commit()
        return transaction

    return _make_transaction


@pytest.fixture
def client(mock_settings, test_db_engine):
    """Test client with proper database setup."""
    from db.session import get_db, reset_engines

    reset_engines()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_db_engine
    )

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with patch("core.dependencies._settings", mock_settings):
        with TestClient(app) as test_client:
            yield test_client

    app.dependency_overrides.clear()
    reset_engines()
