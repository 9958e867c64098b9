import logging
import httpx
from payment_gateway.core.config import Settings

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Shared client for outbound provider calls.
    Every call is bounded by PROVIDER_TIMEOUT_SECONDS; a timeout surfaces as ProviderUnavailableError.
    """
    logger.info(
        f"Creating provider http client (timeout={settings.PROVIDER_TIMEOUT_SECONDS}s)")
    return httpx.AsyncClient(
        headers={"User-Agent": f"{settings.APP_NAME}/{settings.APP_VERSION}"},
        timeout=httpx.Timeout(settings.PROVIDER_TIMEOUT_SECONDS),
        limits=httpx.Limits(max_connections=50, max_keepalive_connections=10),
    )
