import logging
from sqlalchemy.ext.asyncio import AsyncSession
from payment_gateway.models.enums import Provider
from payment_gateway.models.webhook import Webhook

logger = logging.getLogger(__name__)


class WebhookStore:
    async def record_webhook(self, db: AsyncSession, provider: Provider, payload: str) -> Webhook:
        try:
            webhook = Webhook(provider=provider, payload=payload)
            db.add(webhook)
            await db.commit()
            return webhook
        except Exception as e:
            logger.error(f"Failed to record {provider.value} webhook: {e}", exc_info=True)
            await db.rollback()
            raise


webhook_store = WebhookStore()
