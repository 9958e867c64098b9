import logging
from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from payment_gateway.models.enums import Provider, TransactionStatus
from payment_gateway.models.request_log import RequestLog
from payment_gateway.models.transaction import Transaction

logger = logging.getLogger(__name__)


class TransactionStore:
    """
    Only writer of Transaction and RequestLog rows.
    """

    async def record_transaction(self, db: AsyncSession, transaction: Transaction, request_log: RequestLog) -> Transaction:
        # both rows go out in a single commit, or neither does
        try:
            db.add_all([transaction, request_log])
            await db.commit()
            return transaction
        except Exception as e:
            logger.error(f"Failed to record transaction: {e}", exc_info=True)
            await db.rollback()
            raise

    async def find_by_external_id(self, db: AsyncSession, provider: Provider, transaction_id: str) -> Optional[Transaction]:
        result = await db.execute(
            select(Transaction)
            .where(Transaction.provider == provider)
            .where(Transaction.transaction_id == transaction_id)
        )
        return result.scalar_one_or_none()

    async def update_status(self, db: AsyncSession, transaction: Transaction, new_status: TransactionStatus) -> bool:
        """
        Move a pending transaction to new_status.

        The update is guarded on the row still being PENDING, so when two
        deliveries race only one of them changes the row. Returns False when
        the transaction had already settled.
        """
        try:
            result = await db.execute(
                update(Transaction)
                .where(Transaction.id == transaction.id)
                .where(Transaction.status == TransactionStatus.PENDING)
                .values(status=new_status)
                .execution_options(synchronize_session=False)
            )
            await db.commit()
        except Exception as e:
            logger.error(
                f"Failed to update transaction {transaction.id} to {new_status.value}: {e}", exc_info=True)
            await db.rollback()
            raise

        # pick up the committed status, ours or whoever won the race
        await db.refresh(transaction)
        return result.rowcount == 1


transaction_store = TransactionStore()
