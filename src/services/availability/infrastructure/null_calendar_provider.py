from datetime import date

from services.availability.domain.gateway import CalendarProvider
from services.availability.domain.value_object import DateRange
from services.shared.domain import TenantId


class NullCalendarProvider(CalendarProvider):
    """カレンダー連携が未設定の場合の実装（予定なし）"""

    def get_busy_dates(self, tenant_id: TenantId, date_range: DateRange) -> set[date]:
        return set()
