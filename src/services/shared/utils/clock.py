from collections.abc import Mapping
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from services.shared.domain import TenantId


class TenantClock:
    """テナントのローカル時刻で「今日」を求める時計

    タイムゾーン未設定のテナントは既定のタイムゾーンを使う。
    """

    def __init__(
        self,
        default_timezone: str = "UTC",
        tenant_timezones: Mapping[str, str] | None = None,
    ) -> None:
        self._default_zone = ZoneInfo(default_timezone)
        self._zones = {
            tenant: ZoneInfo(zone) for tenant, zone in (tenant_timezones or {}).items()
        }

    def now(self) -> datetime:
        """現在時刻（UTC, aware）"""
        return datetime.now(timezone.utc)

    def zone_for(self, tenant_id: TenantId) -> ZoneInfo:
        return self._zones.get(str(tenant_id), self._default_zone)

    def today(self, tenant_id: TenantId) -> date:
        return self.now().astimezone(self.zone_for(tenant_id)).date()
