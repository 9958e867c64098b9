import httpx
from fastapi import Depends, Request
from payment_gateway.core.config import Settings, get_settings
from payment_gateway.models.enums import Provider
from payment_gateway.services.payment_orchestrator import PaymentOrchestrator
from payment_gateway.services.providers import build_adapter
from payment_gateway.services.webhook_reconciler import WebhookReconciler


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """The provider client is created once in the app lifespan."""
    return request.app.state.http_client


def get_easy_money_orchestrator(http_client: httpx.AsyncClient = Depends(get_http_client),
                                settings: Settings = Depends(get_settings)) -> PaymentOrchestrator:
    return PaymentOrchestrator(build_adapter(Provider.EASY_MONEY, http_client, settings))


def get_super_walletz_orchestrator(http_client: httpx.AsyncClient = Depends(get_http_client),
                                   settings: Settings = Depends(get_settings)) -> PaymentOrchestrator:
    return PaymentOrchestrator(build_adapter(Provider.SUPER_WALLETZ, http_client, settings))


def get_super_walletz_reconciler() -> WebhookReconciler:
    return WebhookReconciler(Provider.SUPER_WALLETZ)
