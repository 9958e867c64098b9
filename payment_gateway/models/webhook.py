import uuid
from sqlalchemy import Enum as SAEnum, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from payment_gateway.db.base import Base
from payment_gateway.models.enums import Provider
from .mixins import TimestampMixin


class Webhook(Base, TimestampMixin):
    """
    Raw record of every inbound provider callback, stored before it is processed.
    """
    __tablename__ = "webhooks"
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    provider: Mapped[Provider] = mapped_column(SAEnum(Provider), nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
