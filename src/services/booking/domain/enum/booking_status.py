from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス

    PENDING_PAYMENT からの遷移のみ許可され、CONFIRMED / CANCELLED は終端。
    """

    PENDING_PAYMENT = "pending_payment"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
