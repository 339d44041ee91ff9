from pydantic import BaseModel, ConfigDict

from core.settings import Settings


class GatewayConfig(BaseModel):
    """Per-gateway Soisy configuration."""

    shop_id: str
    auth_token: str
    webhook_secret: str
    sandbox_enabled: bool = False
    live_api_url: str = "https://api.soisy.it/api"
    sandbox_api_url: str = "https://api.sandbox.soisy.it/api"
    live_shop_url: str = "https://shop.soisy.it"
    sandbox_shop_url: str = "https://shop.sandbox.soisy.it"
    min_amount: float = 100
    max_amount: float = 15000
    timeout: float = 10.0
    locale: str = "en"

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayConfig":
        return cls(
            shop_id=settings.SOISY_SHOP_ID,
            auth_token=settings.SOISY_AUTH_TOKEN,
            webhook_secret=settings.SOISY_WEBHOOK_SECRET,
            sandbox_enabled=settings.SOISY_SANDBOX_ENABLED,
            live_api_url=settings.SOISY_API_URL,
            sandbox_api_url=settings.SOISY_SANDBOX_API_URL,
            live_shop_url=settings.SOISY_SHOP_URL,
            sandbox_shop_url=settings.SOISY_SANDBOX_SHOP_URL,
            min_amount=settings.SOISY_MIN_AMOUNT,
            max_amount=settings.SOISY_MAX_AMOUNT,
            timeout=settings.SOISY_API_TIMEOUT,
            locale=settings.SOISY_LOCALE,
        )

    @property
    def api_url(self) -> str:
        return self.sandbox_api_url if self.sandbox_enabled else self.live_api_url

    @property
    def shop_url(self) -> str:
        return self.sandbox_shop_url if self.sandbox_enabled else self.live_shop_url

    @property
    def orders_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/shops/{self.shop_id}/orders"
