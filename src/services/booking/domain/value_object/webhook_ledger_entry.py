from dataclasses import dataclass
from datetime import datetime

from services.booking.domain.enum import WebhookOutcome
from services.shared.domain import TenantId


@dataclass(frozen=True)
class WebhookLedgerEntry:
    """処理済み Webhook イベントの記録

    存在すれば、そのイベントの効果は適用済み。
    tenant_id が None のエントリはテナントを特定できなかった通知。
    """

    event_id: str
    tenant_id: TenantId | None
    outcome: WebhookOutcome
    processed_at: datetime
    booking_id: str | None = None
