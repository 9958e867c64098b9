from decimal import Decimal
from typing import Optional
import uuid
from sqlalchemy import Enum as SAEnum, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from payment_gateway.db.base import Base
from payment_gateway.models.enums import Provider, TransactionStatus
from .mixins import TimestampMixin


class Transaction(Base, TimestampMixin):
    """
    A payment initiated through one of the providers.
    (provider, transaction_id) is the reconciliation key used by webhooks.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        UniqueConstraint("provider", "transaction_id",
                         name="uix_transactions_provider_external_id"),
    )
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
    provider: Mapped[Provider] = mapped_column(SAEnum(Provider), nullable=False)
    status: Mapped[TransactionStatus] = mapped_column(
        SAEnum(TransactionStatus), default=TransactionStatus.PENDING, nullable=False)
    # provider assigned id, absent when the provider did not return one
    transaction_id: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, index=True)
