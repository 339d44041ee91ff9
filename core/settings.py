import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600

    # Soisy gateway
    SOISY_SHOP_ID: str
    SOISY_AUTH_TOKEN: str
    SOISY_WEBHOOK_SECRET: str
    SOISY_SANDBOX_ENABLED: bool = False
    SOISY_API_URL: str = "https://api.soisy.it/api"
    SOISY_SANDBOX_API_URL: str = "https://api.sandbox.soisy.it/api"
    SOISY_SHOP_URL: str = "https://shop.soisy.it"
    SOISY_SANDBOX_SHOP_URL: str = "https://shop.sandbox.soisy.it"
    SOISY_MIN_AMOUNT: float = 100
    SOISY_MAX_AMOUNT: float = 15000
    SOISY_API_TIMEOUT: float = 10.0
    SOISY_LOCALE: str = "en"

    # Public base URL used for success/cancel/callback links
    SITE_URL: str = "http://localhost:8000"

    # App settings
    APP_NAME: str = "Soisy Commerce Gateway"
    DEBUG: bool = False
    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    # Observability (Optional)
    OTEL_EXPORTER_OTLP_ENDPOINT: str = "http://localhost:4317"
    OTEL_SERVICE_NAME: str = "soisy-commerce-gateway"

    # Metrics (Optional)
    METRICS_ENABLED: bool = True

    model_config = ConfigDict(env_file=".env", case_sensitive=True)

    def __init__(self, **kwargs):
        # Check for DATABASE_URL before calling parent constructor
        if not kwargs.get("DATABASE_URL") and not os.getenv("DATABASE_URL"):
            raise RuntimeError(
                "DATABASE_URL not set; create .env or export the variable"
            )
        super().__init__(**kwargs)
