from datetime import date

import pytest

from services.availability.domain.exception import InvalidDateRangeException
from services.availability.domain.value_object import DateRange


class TestDateRange:
    """DateRange のテスト"""

    def test_inclusive_days(self):
        date_range = DateRange(date(2025, 7, 1), date(2025, 7, 3))

        assert date_range.days == 3
        assert list(date_range) == [date(2025, 7, 1), date(2025, 7, 2), date(2025, 7, 3)]
        assert date(2025, 7, 3) in date_range
        assert date(2025, 7, 4) not in date_range

    def test_single_day(self):
        assert DateRange(date(2025, 7, 4), date(2025, 7, 4)).days == 1

    def test_end_before_start_is_rejected(self):
        with pytest.raises(InvalidDateRangeException):
            DateRange(date(2025, 7, 2), date(2025, 7, 1))

    def test_bounded(self):
        assert DateRange.bounded(date(2025, 7, 1), date(2025, 8, 29), 60).days == 60
        with pytest.raises(InvalidDateRangeException, match="61 days"):
            DateRange.bounded(date(2025, 7, 1), date(2025, 8, 30), 60)

    def test_clipped_from(self):
        date_range = DateRange(date(2025, 7, 1), date(2025, 7, 10))

        assert date_range.clipped_from(date(2025, 7, 5)) == DateRange(
            date(2025, 7, 5), date(2025, 7, 10)
        )
        assert date_range.clipped_from(date(2025, 6, 1)) == date_range
        assert date_range.clipped_from(date(2025, 7, 11)) is None
