from dataclasses import dataclass
from datetime import date

from services.availability.domain.enum import UnavailabilityReason


@dataclass(frozen=True)
class AvailabilityVerdict:
    """1日分の空き状況

    degraded が True の場合、外部カレンダーを確認できずに判定している。
    """

    date: date
    reasons: frozenset[UnavailabilityReason]
    degraded: bool = False

    @property
    def available(self) -> bool:
        return not self.reasons


@dataclass(frozen=True)
class UnavailableDates:
    """範囲内で予約できない日付の集合"""

    dates: frozenset[date]
    degraded: bool = False
