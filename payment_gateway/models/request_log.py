import uuid
from sqlalchemy import Enum as SAEnum, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from payment_gateway.db.base import Base
from payment_gateway.models.enums import Provider
from .mixins import TimestampMixin


class RequestLog(Base, TimestampMixin):
    """
    Append-only audit of every outbound provider call that produced a transaction.
    """
    __tablename__ = "requests"
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    provider: Mapped[Provider] = mapped_column(SAEnum(Provider), nullable=False)
    endpoint: Mapped[str] = mapped_column(String(2048), nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=True)
