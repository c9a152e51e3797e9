from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta

from services.availability.domain.exception import InvalidDateRangeException


@dataclass(frozen=True)
class DateRange:
    """開始日・終了日を両端含む日付範囲"""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidDateRangeException(
                f"End date {self.end} is before start date {self.start}"
            )

    @classmethod
    def bounded(cls, start: date, end: date, max_days: int) -> DateRange:
        """日数の上限付きで範囲を生成する"""
        date_range = cls(start, end)
        if date_range.days > max_days:
            raise InvalidDateRangeException(
                f"Date range spans {date_range.days} days (max {max_days})"
            )
        return date_range

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def __iter__(self) -> Iterator[date]:
        for offset in range(self.days):
            yield self.start + timedelta(days=offset)

    def clipped_from(self, first_day: date) -> DateRange | None:
        """first_day 以降の部分範囲（なければ None）"""
        if first_day > self.end:
            return None
        return DateRange(max(self.start, first_day), self.end)
