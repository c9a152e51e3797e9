from abc import ABC, abstractmethod
from datetime import date

from services.availability.domain.entity import Blackout
from services.availability.domain.value_object import DateRange
from services.shared.domain import EventDate, TenantId


class BlackoutRepository(ABC):
    """ブラックアウトリポジトリのインターフェース"""

    @abstractmethod
    def save(self, blackout: Blackout) -> None:
        """保存する（同じ日付が既にあれば DuplicateResourceException）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_date(self, tenant_id: TenantId, date: EventDate) -> Blackout | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, tenant_id: TenantId, date: EventDate) -> None:
        """削除する（存在しなければ ResourceNotFoundException）"""
        raise NotImplementedError

    @abstractmethod
    def list_for_tenant(self, tenant_id: TenantId) -> list[Blackout]:
        raise NotImplementedError

    @abstractmethod
    def find_dates_in_range(self, tenant_id: TenantId, date_range: DateRange) -> set[date]:
        """範囲内のブラックアウト日を1回の問い合わせで返す"""
        raise NotImplementedError
