from enum import Enum


class CancellationReason(str, Enum):
    """予約のキャンセル理由"""

    PAYMENT_FAILED = "payment_failed"
    DATE_CONFLICT = "date_conflict"
    EXPIRED = "expired"
