from typing import Any, Optional
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

# Transaction.amount is Numeric(12, 2) and Transaction.currency is String(10)
MAX_AMOUNT = 9_999_999_999
MAX_CURRENCY_LENGTH = 10

_http_url = TypeAdapter(HttpUrl)


class EasyMoneyPaymentRequest(BaseModel):
    amount: int = Field(ge=1, le=MAX_AMOUNT)
    currency: str = Field(min_length=3, max_length=MAX_CURRENCY_LENGTH)


class SuperWalletzPaymentRequest(BaseModel):
    amount: float = Field(ge=1, le=MAX_AMOUNT, allow_inf_nan=False)
    currency: str = Field(min_length=1, max_length=3)
    # SuperWalletz reports the final status to this url, forwarded as sent
    callback_url: str

    @field_validator("callback_url")
    @classmethod
    def check_callback_url(cls, value: str) -> str:
        try:
            _http_url.validate_python(value)
        except ValueError:
            raise ValueError("must be a valid http(s) URL")
        return value


class EasyMoneyPaymentResponse(BaseModel):
    message: str
    data: str


class SuperWalletzPaymentResponse(BaseModel):
    message: str
    transaction_id: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Any = None
