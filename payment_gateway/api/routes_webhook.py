import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from payment_gateway.api.deps import get_super_walletz_reconciler
from payment_gateway.db.core import get_db_session
from payment_gateway.schemas.webhook import WebhookAck
from payment_gateway.services.webhook_reconciler import WebhookReconciler

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/super-walletz/webhook", response_model=WebhookAck)
async def super_walletz_webhook(request: Request,
                                db: AsyncSession = Depends(get_db_session),
                                reconciler: WebhookReconciler = Depends(get_super_walletz_reconciler)):
    """
    SuperWalletz posts the final payment status here.

    Always answers 200 with a message once the callback has been stored,
    including for unknown transactions and malformed payloads, so the
    provider does not retry forever.
    """
    # raw body, so that even unparseable callbacks are stored as received
    payload = await request.body()
    # a failed audit write surfaces as a 500 so the provider redelivers;
    # every outcome after the write is acknowledged with 200
    outcome = await reconciler.handle_webhook(db, payload)
    logger.debug(f"SuperWalletz webhook outcome: {outcome.result.value}")
    return WebhookAck(message=outcome.message)
