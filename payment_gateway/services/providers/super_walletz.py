from typing import Any
import httpx
from payment_gateway.core.exceptions import ProviderRejectedError
from payment_gateway.models.enums import Provider, TransactionStatus
from payment_gateway.schemas.payment import SuperWalletzPaymentRequest
from .base import ProviderAdapter, ProviderResult


class SuperWalletzAdapter(ProviderAdapter):
    """
    SuperWalletz only acknowledges the request. The final status is posted
    later to the callback_url and lands in the webhook reconciler, keyed by
    the transaction_id returned here.
    """
    provider = Provider.SUPER_WALLETZ
    request_schema = SuperWalletzPaymentRequest
    success_message = "Payment initiated successfully"
    failure_message = "Failed to initiate payment"

    def parse_response(self, response: httpx.Response, body: Any) -> ProviderResult:
        transaction_id = self.external_id(body)
        if transaction_id is None:
            # without an id the webhook could never be matched
            raise ProviderRejectedError(
                self.failure_message, provider=self.provider.value,
                details=body, provider_status_code=response.status_code)
        return ProviderResult(
            success=True,
            transaction_id=transaction_id,
            raw_response=body,
        )

    def initial_status(self, result: ProviderResult) -> TransactionStatus:
        return TransactionStatus.PENDING
