from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta


@dataclass(frozen=True, order=True)
class EventDate:
    """イベント日（テナントのローカル暦日）"""

    value: date

    def __post_init__(self) -> None:
        if not isinstance(self.value, date):
            raise ValueError(f"Invalid event date: {self.value!r}")

    @classmethod
    def from_string(cls, s: str) -> EventDate:
        """YYYY-MM-DD 形式の文字列から生成"""
        try:
            return cls(value=date.fromisoformat(s))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid date format (expected YYYY-MM-DD): {s}") from e

    def __str__(self) -> str:
        return self.value.isoformat()

    def is_before(self, other: date) -> bool:
        return self.value < other

    def plus_days(self, days: int) -> EventDate:
        return EventDate(self.value + timedelta(days=days))
