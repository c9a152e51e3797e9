import pytest

from services.availability.applications import AvailabilityService
from tests.unit.services.fakes import (
    FakeCalendarProvider,
    InMemoryBlackoutRepository,
    InMemoryBookingRepository,
)


@pytest.fixture
def blackout_repository():
    return InMemoryBlackoutRepository()


@pytest.fixture
def booking_repository():
    return InMemoryBookingRepository()


@pytest.fixture
def calendar():
    return FakeCalendarProvider()


@pytest.fixture
def availability_service(blackout_repository, booking_repository, calendar, clock):
    return AvailabilityService(
        blackout_repository=blackout_repository,
        booking_repository=booking_repository,
        calendar=calendar,
        clock=clock,
        horizon_days=60,
    )
