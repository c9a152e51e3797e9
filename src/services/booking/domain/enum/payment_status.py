from enum import Enum


class PaymentStatus(str, Enum):
    """Webhook で通知される決済結果（ゲートウェイ非依存）"""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"
