from .timestamp import TimestampMixin as TimestampMixin

__all__ = ["TimestampMixin"]
