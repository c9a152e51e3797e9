from enum import Enum


class WebhookOutcome(str, Enum):
    """Webhook の処理結果"""

    DUPLICATE = "duplicate"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    CONFLICT = "conflict"
    UNKNOWN_SESSION = "unknown_session"
    ALREADY_SETTLED = "already_settled"
