from collections.abc import Callable, Mapping
from datetime import date, datetime, time, timedelta

import httpx
from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.parameters.exceptions import (
    GetParameterError,
    TransformParameterError,
)

from services.availability.domain.exception import (
    ProviderTimeoutException,
    ProviderUnavailableException,
)
from services.availability.domain.gateway import CalendarProvider
from services.availability.domain.value_object import DateRange
from services.shared.domain import TenantId
from services.shared.utils import TenantClock

logger = Logger(child=True)

FREEBUSY_URL = "https://www.googleapis.com/calendar/v3/freeBusy"


class GoogleCalendarProvider(CalendarProvider):
    """Google Calendar FreeBusy API を使用した CalendarProvider

    - 範囲ごとに1回だけ POST する
    - 予定の区間（終了は含まない）をテナントのローカル日付に変換し、範囲で切り取る
    - カレンダー未設定のテナントは常に予定なし

    API キーとテナントごとのカレンダーIDは、初回の問い合わせ時に
    loader から取得する（Secrets Manager / SSM、キャッシュは Powertools 側）。
    """

    def __init__(
        self,
        client: httpx.Client,
        api_key_loader: Callable[[], str],
        calendar_ids_loader: Callable[[], Mapping[str, str]],
        clock: TenantClock,
    ) -> None:
        self._client = client
        self._api_key_loader = api_key_loader
        self._calendar_ids_loader = calendar_ids_loader
        self._clock = clock

    def get_busy_dates(self, tenant_id: TenantId, date_range: DateRange) -> set[date]:
        try:
            calendar_id = self._calendar_ids_loader().get(str(tenant_id))
            if not calendar_id:
                return set()
            api_key = self._api_key_loader()
        except (GetParameterError, TransformParameterError) as e:
            raise ProviderUnavailableException(
                f"Calendar configuration could not be loaded: {e}"
            ) from e

        zone = self._clock.zone_for(tenant_id)
        body = {
            "timeMin": datetime.combine(date_range.start, time.min, zone).isoformat(),
            "timeMax": datetime.combine(
                date_range.end + timedelta(days=1), time.min, zone
            ).isoformat(),
            "timeZone": zone.key,
            "items": [{"id": calendar_id}],
        }

        try:
            response = self._client.post(
                FREEBUSY_URL, params={"key": api_key}, json=body
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise ProviderTimeoutException(
                f"Calendar request timed out for tenant {tenant_id}"
            ) from e
        except httpx.HTTPStatusError as e:
            raise ProviderUnavailableException(
                f"Calendar returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderUnavailableException(f"Calendar request failed: {e}") from e
        except ValueError as e:
            raise ProviderUnavailableException("Calendar returned invalid JSON") from e

        try:
            calendar = payload["calendars"][calendar_id]
            if calendar.get("errors"):
                raise ProviderUnavailableException(
                    f"Calendar reported errors: {calendar['errors']}"
                )
            busy = set()
            for interval in calendar.get("busy", []):
                start = datetime.fromisoformat(interval["start"]).astimezone(zone)
                end = datetime.fromisoformat(interval["end"]).astimezone(zone)
                busy |= _covered_dates(start, end, date_range)
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderUnavailableException(
                "Calendar returned a malformed response"
            ) from e

        logger.debug(
            "Calendar busy dates fetched",
            extra={"tenant_id": str(tenant_id), "busy_days": len(busy)},
        )
        return busy


def _covered_dates(start: datetime, end: datetime, date_range: DateRange) -> set[date]:
    """[start, end) が重なるローカル日付（範囲内のみ）"""
    if end <= start:
        return set()
    last = min((end - timedelta(microseconds=1)).date(), date_range.end)
    days = set()
    day = max(start.date(), date_range.start)
    while day <= last:
        days.add(day)
        day += timedelta(days=1)
    return days
