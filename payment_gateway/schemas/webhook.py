from typing import Literal
from pydantic import BaseModel, ConfigDict, Field


class WebhookPayload(BaseModel):
    """
    Fields the reconciler needs from a provider callback.
    Anything else the provider sends is kept on the model but ignored.
    """
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    status: Literal["success", "failed"]
    transaction_id: str = Field(min_length=1)


class WebhookAck(BaseModel):
    message: str
