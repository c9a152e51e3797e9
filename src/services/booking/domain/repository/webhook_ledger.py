from abc import ABC, abstractmethod

from services.booking.domain.value_object import WebhookLedgerEntry
from services.shared.domain import TenantId


class WebhookLedger(ABC):
    """処理済み Webhook イベント台帳のインターフェース"""

    @abstractmethod
    def contains(self, tenant_id: TenantId | None, event_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def record(self, entry: WebhookLedgerEntry) -> None:
        """記録する（既にあれば WebhookAlreadyProcessedException）"""
        raise NotImplementedError
