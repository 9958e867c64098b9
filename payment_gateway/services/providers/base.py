"""
Provider adapter interface.

An adapter turns a validated payment request into the provider's outbound
call and maps the provider's reply back into a ProviderResult. Adapters do
no persistence; recording the outcome is the orchestrator's job.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Type
import httpx
from pydantic import BaseModel
from payment_gateway.core.exceptions import ProviderRejectedError, ProviderUnavailableError
from payment_gateway.models.enums import Provider, TransactionStatus

logger = logging.getLogger(__name__)


@dataclass
class ProviderResult:
    success: bool
    transaction_id: Optional[str]
    # whatever the provider sent back, kept for the request log
    raw_response: Any


def response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class ProviderAdapter(ABC):
    provider: ClassVar[Provider]
    request_schema: ClassVar[Type[BaseModel]]
    success_message: ClassVar[str] = "Payment processed successfully"
    failure_message: ClassVar[str] = "Failed to process payment"

    def __init__(self, http_client: httpx.AsyncClient, endpoint: str):
        self.http_client = http_client
        self.endpoint = endpoint

    def build_payload(self, request: BaseModel) -> Dict[str, Any]:
        return request.model_dump(mode="json")

    async def initiate(self, request: BaseModel) -> ProviderResult:
        payload = self.build_payload(request)
        logger.info(f"Calling {self.provider.value} at {self.endpoint}")
        try:
            response = await self.http_client.post(self.endpoint, json=payload)
        except httpx.TimeoutException as e:
            logger.warning(f"{self.provider.value} timed out: {e!r}")
            raise ProviderUnavailableError(
                self.failure_message, provider=self.provider.value,
                details=f"{self.provider.value} did not respond in time")
        except httpx.RequestError as e:
            logger.warning(f"{self.provider.value} unreachable: {e!r}")
            raise ProviderUnavailableError(
                self.failure_message, provider=self.provider.value,
                details=f"{self.provider.value} is unreachable")

        body = response_body(response)
        if not response.is_success:
            logger.warning(
                f"{self.provider.value} rejected payment with HTTP {response.status_code}: {body}")
            raise ProviderRejectedError(
                self.failure_message, provider=self.provider.value,
                details=body, provider_status_code=response.status_code)

        result = self.parse_response(response, body)
        logger.info(
            f"{self.provider.value} answered HTTP {response.status_code} (transaction_id={result.transaction_id})")
        return result

    @staticmethod
    def external_id(body: Any) -> Optional[str]:
        if isinstance(body, dict) and body.get("transaction_id") not in (None, ""):
            return str(body["transaction_id"])
        return None

    @abstractmethod
    def parse_response(self, response: httpx.Response, body: Any) -> ProviderResult:
        ...

    @abstractmethod
    def initial_status(self, result: ProviderResult) -> TransactionStatus:
        """Status the transaction is created with once the call returns."""
        ...
