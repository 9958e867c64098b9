from .enums import Provider as Provider, TransactionStatus as TransactionStatus
from .transaction import Transaction as Transaction
from .request_log import RequestLog as RequestLog
from .webhook import Webhook as Webhook

__all__ = ["Provider", "TransactionStatus", "Transaction", "RequestLog", "Webhook"]
