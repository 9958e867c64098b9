from typing import Any, Dict, Iterable, List, Optional


class PaymentGatewayError(Exception):
    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


def validation_details(errors: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Group pydantic/FastAPI validation errors by field name,
    e.g. {"amount": ["Input should be greater than or equal to 1"]}.
    """
    details: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        field = ".".join(loc) or "body"
        details.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return details


class InvalidRequestError(PaymentGatewayError):
    def __init__(self, details: Optional[Dict[str, List[str]]] = None):
        super().__init__("Validation failed", status_code=400, details=details or {})


class ProviderError(PaymentGatewayError):
    """Upstream provider failed; details carries whatever the provider sent back."""

    def __init__(self, message: str, provider: str, details: Any = None):
        self.provider = provider
        super().__init__(message, status_code=400, details=details)


class ProviderUnavailableError(ProviderError):
    pass


class ProviderRejectedError(ProviderError):
    def __init__(self, message: str, provider: str, details: Any = None, provider_status_code: Optional[int] = None):
        self.provider_status_code = provider_status_code
        super().__init__(message, provider=provider, details=details)


class MalformedWebhookError(PaymentGatewayError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("Malformed webhook payload", status_code=400, details=reason)


class TransactionNotFoundError(PaymentGatewayError):
    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(
            f"Transaction not found for transaction_id: {transaction_id}", status_code=404)


class InternalError(PaymentGatewayError):
    def __init__(self, details: str = ""):
        super().__init__("An unexpected error occurred", status_code=500, details=details)
