from datetime import datetime, timezone

import pytest

from services.booking.domain.enum import BookingStatus, CancellationReason
from services.booking.domain.event import BookingPaid
from services.booking.domain.value_object import Customer
from services.shared.domain import Money
from services.shared.domain.exception import BusinessRuleViolationException

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestBookingConfirm:
    """Booking.confirm のテスト"""

    def test_confirm_emits_booking_paid(self, create_booking):
        # Arrange
        booking = create_booking()

        # Act
        booking.confirm(at=NOW)

        # Assert
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.updated_at == NOW
        events = booking.flush_domain_events()
        assert len(events) == 1
        event = events[0]
        assert isinstance(event, BookingPaid)
        assert event.booking_id == "bk-1"
        assert event.email == "jane@example.com"
        assert event.add_on_titles == ("Photos",)
        assert event.total == Money.usd(65000)

    @pytest.mark.parametrize("status", [BookingStatus.CONFIRMED, BookingStatus.CANCELLED])
    def test_only_pending_can_be_confirmed(self, create_booking, status):
        booking = create_booking(status=status)

        with pytest.raises(BusinessRuleViolationException, match="Cannot confirm"):
            booking.confirm(at=NOW)
        assert booking.flush_domain_events() == []


class TestBookingCancel:
    """Booking.cancel のテスト"""

    def test_cancel_records_reason(self, create_booking):
        booking = create_booking()

        booking.cancel(CancellationReason.PAYMENT_FAILED, at=NOW)

        assert booking.status == BookingStatus.CANCELLED
        assert booking.cancellation_reason == CancellationReason.PAYMENT_FAILED

    def test_cancel_twice_keeps_first_reason(self, create_booking):
        booking = create_booking()
        booking.cancel(CancellationReason.EXPIRED, at=NOW)

        booking.cancel(CancellationReason.PAYMENT_FAILED, at=NOW)

        assert booking.cancellation_reason == CancellationReason.EXPIRED

    def test_confirmed_booking_cannot_be_cancelled(self, create_booking):
        booking = create_booking(status=BookingStatus.CONFIRMED)

        with pytest.raises(BusinessRuleViolationException):
            booking.cancel(CancellationReason.EXPIRED, at=NOW)


class TestCustomer:
    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValueError, match="Invalid email address"):
            Customer(name="Jane", email="jane.example.com")

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValueError, match="name cannot be empty"):
            Customer(name=" ", email="jane@example.com")
