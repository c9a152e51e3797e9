from datetime import date

import pytest

from services.shared.domain import EventDate


class TestEventDate:
    """EventDate のテスト"""

    def test_from_string(self):
        event_date = EventDate.from_string("2025-07-04")
        assert event_date.value == date(2025, 7, 4)
        assert str(event_date) == "2025-07-04"

    @pytest.mark.parametrize("value", ["2025-13-01", "07/04/2025", ""])
    def test_invalid_format_raises_error(self, value):
        with pytest.raises(ValueError, match="Invalid date format"):
            EventDate.from_string(value)

    def test_ordering_and_arithmetic(self):
        day = EventDate(date(2025, 7, 4))
        assert day.plus_days(1) == EventDate(date(2025, 7, 5))
        assert day < day.plus_days(1)
        assert day.is_before(date(2025, 7, 5))
        assert not day.is_before(date(2025, 7, 4))
