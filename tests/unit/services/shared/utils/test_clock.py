from datetime import date, datetime, timezone

from services.shared.domain import TenantId

from tests.unit.services.fakes import FixedClock


class TestTenantClock:
    """TenantClock のテスト"""

    def test_today_uses_tenant_timezone(self):
        """UTC では翌日でも、テナントのローカル日付で判定する"""
        # Arrange
        clock = FixedClock(
            datetime(2025, 7, 4, 2, 0, tzinfo=timezone.utc),
            tenant_timezones={"acme": "America/New_York"},
        )

        # Act & Assert
        assert clock.today(TenantId("acme")) == date(2025, 7, 3)
        assert clock.today(TenantId("globex")) == date(2025, 7, 4)

    def test_default_timezone(self):
        clock = FixedClock(
            datetime(2025, 7, 4, 20, 0, tzinfo=timezone.utc),
            default_timezone="Asia/Tokyo",
        )

        assert clock.today(TenantId("acme")) == date(2025, 7, 5)
