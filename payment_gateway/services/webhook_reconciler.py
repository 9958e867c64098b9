import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from payment_gateway.core.exceptions import InternalError, MalformedWebhookError, TransactionNotFoundError
from payment_gateway.crud.transaction_store import TransactionStore, transaction_store
from payment_gateway.crud.webhook_store import WebhookStore, webhook_store
from payment_gateway.models.enums import Provider, TransactionStatus
from payment_gateway.models.transaction import Transaction
from payment_gateway.schemas.webhook import WebhookPayload

logger = logging.getLogger(__name__)

ACK_MESSAGE = "Webhook received successfully"


class WebhookResult(str, Enum):
    APPLIED = "applied"
    # transaction had already settled, nothing changed
    DUPLICATE = "duplicate"
    TRANSACTION_NOT_FOUND = "transaction_not_found"
    MALFORMED = "malformed"
    # recorded, but the status update could not be applied
    FAILED = "failed"


@dataclass
class WebhookOutcome:
    result: WebhookResult
    message: str
    transaction: Optional[Transaction] = None


class WebhookReconciler:
    """
    Applies provider callbacks to the transactions they refer to.

    pending --success--> success
    pending --failed---> failed

    Settled transactions never move again; repeated or late deliveries are
    acknowledged without touching the row. Every callback is stored in the
    webhooks table before anything else happens, and once it is stored the
    provider always gets an acknowledgment so it does not keep retrying.
    """

    def __init__(self, provider: Provider, store: TransactionStore = transaction_store, audit: WebhookStore = webhook_store):
        self.provider = provider
        self.store = store
        self.audit = audit

    def parse(self, body: str) -> WebhookPayload:
        try:
            data = json.loads(body)
        except ValueError:
            raise MalformedWebhookError("body is not valid JSON")
        try:
            return WebhookPayload.model_validate(data)
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) or "body" for err in e.errors()})
            raise MalformedWebhookError(f"invalid fields: {', '.join(fields)}")

    async def handle_webhook(self, db: AsyncSession, raw_payload: Union[bytes, str]) -> WebhookOutcome:
        body = raw_payload.decode("utf-8", errors="replace") if isinstance(raw_payload, bytes) else raw_payload

        try:
            await self.audit.record_webhook(db, self.provider, body)
        except Exception:
            # nothing durable yet, let the provider deliver it again
            raise InternalError(details="Failed to record webhook")

        try:
            payload = self.parse(body)
        except MalformedWebhookError as e:
            logger.warning(f"Malformed {self.provider.value} webhook: {e.reason}")
            return WebhookOutcome(WebhookResult.MALFORMED, e.message)

        logger.info(
            f"{self.provider.value} webhook: transaction_id={payload.transaction_id} status={payload.status}")
        new_status = TransactionStatus(payload.status)

        try:
            transaction = await self.store.find_by_external_id(db, self.provider, payload.transaction_id)
            if transaction is None:
                raise TransactionNotFoundError(payload.transaction_id)
            applied = await self.store.update_status(db, transaction, new_status)
        except TransactionNotFoundError as e:
            logger.error(e.message)
            return WebhookOutcome(WebhookResult.TRANSACTION_NOT_FOUND, e.message)
        except Exception as e:
            logger.error(
                f"Failed to reconcile {self.provider.value} transaction_id={payload.transaction_id}: {e}", exc_info=True)
            return WebhookOutcome(WebhookResult.FAILED, "Webhook received, reconciliation failed")

        if applied:
            logger.info(f"Transaction {transaction.id} moved to {new_status.value}")
            return WebhookOutcome(WebhookResult.APPLIED, ACK_MESSAGE, transaction)

        if transaction.status != new_status:
            logger.warning(
                f"Transaction {transaction.id} already {transaction.status.value}, ignoring {new_status.value} webhook")
        else:
            logger.info(f"Transaction {transaction.id} already {new_status.value}, duplicate webhook")
        return WebhookOutcome(WebhookResult.DUPLICATE, ACK_MESSAGE, transaction)
