import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from payment_gateway.core.exceptions import InternalError, InvalidRequestError, ProviderError, validation_details
from payment_gateway.crud.transaction_store import TransactionStore, transaction_store
from payment_gateway.models.request_log import RequestLog
from payment_gateway.models.transaction import Transaction
from payment_gateway.services.providers import ProviderAdapter

logger = logging.getLogger(__name__)


@dataclass
class OrchestrationResult:
    message: str
    transaction: Transaction

    @property
    def transaction_id(self) -> Optional[str]:
        return self.transaction.transaction_id


class PaymentOrchestrator:
    """
    validate -> call provider -> persist -> respond, for one provider.
    """

    def __init__(self, adapter: ProviderAdapter, store: TransactionStore = transaction_store):
        self.adapter = adapter
        self.store = store

    def validate(self, raw_request: Any) -> BaseModel:
        try:
            return self.adapter.request_schema.model_validate(raw_request)
        except ValidationError as e:
            raise InvalidRequestError(details=validation_details(e.errors()))

    async def pay(self, db: AsyncSession, raw_request: Any) -> OrchestrationResult:
        request = self.validate(raw_request)
        provider = self.adapter.provider

        try:
            result = await self.adapter.initiate(request)
        except ProviderError:
            # nothing is persisted for a rejected or unreachable provider call
            raise
        except Exception as e:
            logger.error(f"{provider.value} adapter failed: {e}", exc_info=True)
            raise InternalError(details=f"{provider.value} call failed")

        payload = self.adapter.build_payload(request)
        transaction = Transaction(
            amount=Decimal(str(payload["amount"])),
            currency=payload["currency"],
            provider=provider,
            status=self.adapter.initial_status(result),
            transaction_id=result.transaction_id,
        )
        request_log = RequestLog(
            provider=provider,
            endpoint=self.adapter.endpoint,
            payload=json.dumps(payload),
            response=json.dumps(result.raw_response),
        )
        try:
            await self.store.record_transaction(db, transaction, request_log)
        except Exception:
            raise InternalError(details="Failed to record transaction")

        logger.info(
            f"{provider.value} transaction {transaction.id} recorded as {transaction.status.value}"
            f" (transaction_id={transaction.transaction_id})")
        return OrchestrationResult(
            message=self.adapter.success_message,
            transaction=transaction,
        )
