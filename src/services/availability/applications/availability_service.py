from datetime import date

from aws_lambda_powertools import Logger

from services.availability.domain.enum import UnavailabilityReason
from services.availability.domain.exception import (
    ProviderTimeoutException,
    ProviderUnavailableException,
)
from services.availability.domain.gateway import CalendarProvider
from services.availability.domain.repository import BlackoutRepository
from services.availability.domain.value_object import (
    AvailabilityVerdict,
    DateRange,
    UnavailableDates,
)
from services.booking.domain.repository import BookingRepository
from services.shared.domain import TenantId
from services.shared.utils import TenantClock

logger = Logger(child=True)


class AvailabilityService:
    """空き状況の判定ユースケース

    以下のいずれかに該当する日は予約できない:
    - テナントのローカル日付で今日より前
    - ブラックアウト
    - 外部カレンダーに予定がある
    - 確定済みの予約がある

    外部カレンダーの障害時はその情報源だけを無視して判定を続ける
    （degraded=True）。ブラックアウト・予約ストアの障害はそのまま送出する。
    """

    def __init__(
        self,
        blackout_repository: BlackoutRepository,
        booking_repository: BookingRepository,
        calendar: CalendarProvider,
        clock: TenantClock,
        horizon_days: int = 60,
    ) -> None:
        self._blackouts = blackout_repository
        self._bookings = booking_repository
        self._calendar = calendar
        self._clock = clock
        self._horizon_days = horizon_days

    def get_availability(self, tenant_id: TenantId, day: date) -> AvailabilityVerdict:
        """1日分の空き状況を判定する"""
        if day < self._clock.today(tenant_id):
            return AvailabilityVerdict(
                date=day, reasons=frozenset({UnavailabilityReason.PAST})
            )

        date_range = DateRange(day, day)
        reasons = set()
        if day in self._blackouts.find_dates_in_range(tenant_id, date_range):
            reasons.add(UnavailabilityReason.BLACKOUT)
        if day in self._bookings.find_confirmed_dates(tenant_id, day, day):
            reasons.add(UnavailabilityReason.BOOKED)

        busy, degraded = self._busy_dates(tenant_id, date_range)
        if day in busy:
            reasons.add(UnavailabilityReason.CALENDAR)

        return AvailabilityVerdict(
            date=day, reasons=frozenset(reasons), degraded=degraded
        )

    def get_unavailable_dates(
        self, tenant_id: TenantId, start: date, end: date
    ) -> UnavailableDates:
        """範囲内で予約できない日付を返す（各情報源への問い合わせは1回ずつ）"""
        requested = DateRange.bounded(start, end, self._horizon_days)
        today = self._clock.today(tenant_id)

        unavailable = {day for day in requested if day < today}
        upcoming = requested.clipped_from(today)
        if upcoming is None:
            return UnavailableDates(dates=frozenset(unavailable))

        unavailable |= self._blackouts.find_dates_in_range(tenant_id, upcoming)
        unavailable |= self._bookings.find_confirmed_dates(
            tenant_id, upcoming.start, upcoming.end
        )
        busy, degraded = self._busy_dates(tenant_id, upcoming)
        unavailable |= {day for day in busy if day in upcoming}

        return UnavailableDates(dates=frozenset(unavailable), degraded=degraded)

    def _busy_dates(
        self, tenant_id: TenantId, date_range: DateRange
    ) -> tuple[set[date], bool]:
        try:
            return self._calendar.get_busy_dates(tenant_id, date_range), False
        except ProviderTimeoutException as e:
            logger.warning(
                "Calendar provider timed out, availability is degraded",
                extra={"tenant_id": str(tenant_id), "error": str(e)},
            )
        except ProviderUnavailableException as e:
            logger.warning(
                "Calendar provider unavailable, availability is degraded",
                extra={"tenant_id": str(tenant_id), "error": str(e)},
            )
        return set(), True
