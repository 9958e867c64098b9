from typing import Dict, Type
import httpx
from payment_gateway.core.config import Settings
from payment_gateway.models.enums import Provider
from .base import ProviderAdapter, ProviderResult
from .easy_money import EasyMoneyAdapter
from .super_walletz import SuperWalletzAdapter

ADAPTERS: Dict[Provider, Type[ProviderAdapter]] = {
    Provider.EASY_MONEY: EasyMoneyAdapter,
    Provider.SUPER_WALLETZ: SuperWalletzAdapter,
}


def build_adapter(provider: Provider, http_client: httpx.AsyncClient, settings: Settings) -> ProviderAdapter:
    adapter_cls = ADAPTERS[provider]
    return adapter_cls(http_client=http_client, endpoint=settings.provider_endpoint(provider.value))


__all__ = [
    "ADAPTERS",
    "ProviderAdapter",
    "ProviderResult",
    "EasyMoneyAdapter",
    "SuperWalletzAdapter",
    "build_adapter",
]
