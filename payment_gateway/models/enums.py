from enum import Enum


class Provider(str, Enum):
    EASY_MONEY = "EasyMoney"
    SUPER_WALLETZ = "SuperWalletz"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
