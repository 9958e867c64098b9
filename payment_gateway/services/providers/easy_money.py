from typing import Any
import httpx
from payment_gateway.models.enums import Provider, TransactionStatus
from payment_gateway.schemas.payment import EasyMoneyPaymentRequest
from .base import ProviderAdapter, ProviderResult


class EasyMoneyAdapter(ProviderAdapter):
    """EasyMoney settles synchronously: the HTTP reply is the final status."""
    provider = Provider.EASY_MONEY
    request_schema = EasyMoneyPaymentRequest
    success_message = "Payment processed successfully"
    failure_message = "Failed to process payment"

    def parse_response(self, response: httpx.Response, body: Any) -> ProviderResult:
        return ProviderResult(
            success=response.is_success,
            transaction_id=self.external_id(body),
            raw_response=body,
        )

    def initial_status(self, result: ProviderResult) -> TransactionStatus:
        return TransactionStatus.SUCCESS if result.success else TransactionStatus.FAILED
