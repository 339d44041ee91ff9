from fastapi import FastAPI

from core.metrics import metrics_enabled, setup_metrics
from main import app


def test_metrics_enabled_by_default(monkeypatch):
    monkeypatch.delenv("METRICS_ENABLED", raising=False)

    assert metrics_enabled() is True
    assert "/metrics" in [route.path for route in app.routes]


def test_metrics_can_be_switched_off(monkeypatch):
    monkeypatch.setenv("METRICS_ENABLED", "false")
    bare = FastAPI()

    assert metrics_enabled() is False
    assert setup_metrics(bare) is None
    assert "/metrics" not in [route.path for route in bare.routes]
    assert bare.user_middleware == []


def test_metrics_endpoint_served(client):
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "soisy_webhook_events_total" in response.text
