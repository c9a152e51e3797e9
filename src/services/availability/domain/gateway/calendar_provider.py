from abc import ABC, abstractmethod
from datetime import date

from services.availability.domain.value_object import DateRange
from services.shared.domain import TenantId


class CalendarProvider(ABC):
    """外部カレンダー（予定が入っている日）のインターフェース"""

    @abstractmethod
    def get_busy_dates(self, tenant_id: TenantId, date_range: DateRange) -> set[date]:
        """範囲内で予定が入っている日を返す

        Raises:
            ProviderUnavailableException: カレンダーが利用できない場合
        """
        raise NotImplementedError
