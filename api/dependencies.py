from fastapi import Depends

from core.dependencies import get_settings
from core.settings import Settings
from core.urls import UrlBuilder
from payments.config import GatewayConfig
from payments.soisy_gateway import SoisyGateway


def get_gateway_config(settings: Settings = Depends(get_settings)) -> GatewayConfig:
    return GatewayConfig.from_settings(settings)


def get_gateway(
    settings: Settings = Depends(get_settings),
    config: GatewayConfig = Depends(get_gateway_config),
) -> SoisyGateway:
    return SoisyGateway(config, UrlBuilder(settings.SITE_URL))
