import pytest

from services.availability.applications import AvailabilityService
from services.booking.applications import (
    CreateCheckoutService,
    HandlePaymentWebhookService,
)
from services.booking.domain.entity import Booking
from services.booking.domain.event import BookingPaid
from services.booking.domain.factory import BookingFactory
from services.catalog.applications import CatalogService
from services.shared.cache import TtlCache
from services.shared.event_bus import DomainEventBus
from tests.unit.services.fakes import (
    FakeCalendarProvider,
    FakePaymentGateway,
    InMemoryBlackoutRepository,
    InMemoryBookingRepository,
    InMemoryCatalogRepository,
    InMemoryWebhookLedger,
    make_add_on,
    make_booking,
    make_package,
)


@pytest.fixture
def create_booking():
    """Booking を生成する Factory fixture（Factories as fixtures パターン）"""
    return make_booking


@pytest.fixture
def ledger():
    return InMemoryWebhookLedger()


@pytest.fixture
def booking_repository(ledger):
    return InMemoryBookingRepository(ledger)


@pytest.fixture
def store_booking(booking_repository):
    """予約をセッション参照付きで保存する"""

    def _store(booking: Booking) -> Booking:
        booking_repository.save(booking)
        if booking.checkout_session_id:
            booking_repository.sessions[
                (booking.tenant_id, booking.checkout_session_id)
            ] = booking.id
        return booking

    return _store


@pytest.fixture
def event_bus():
    return DomainEventBus()


@pytest.fixture
def published(event_bus):
    """BookingPaid の受信記録"""
    received = []
    event_bus.subscribe(BookingPaid, received.append)
    return received


@pytest.fixture
def webhook_service(booking_repository, ledger, event_bus, clock):
    return HandlePaymentWebhookService(
        repository=booking_repository,
        ledger=ledger,
        event_bus=event_bus,
        clock=clock,
    )


@pytest.fixture
def catalog_repository():
    repository = InMemoryCatalogRepository()
    repository.add_package(make_package(price=50000))
    repository.add_add_on(make_add_on(price=15000))
    return repository


@pytest.fixture
def blackout_repository():
    return InMemoryBlackoutRepository()


@pytest.fixture
def calendar():
    return FakeCalendarProvider()


@pytest.fixture
def gateway():
    return FakePaymentGateway()


@pytest.fixture
def checkout_service(
    catalog_repository, blackout_repository, booking_repository, calendar, gateway, clock
):
    availability = AvailabilityService(
        blackout_repository=blackout_repository,
        booking_repository=booking_repository,
        calendar=calendar,
        clock=clock,
    )
    return CreateCheckoutService(
        availability=availability,
        catalog=CatalogService(catalog_repository, TtlCache()),
        factory=BookingFactory(),
        repository=booking_repository,
        gateway=gateway,
        clock=clock,
        public_base_url="https://book.example.com/",
        session_ttl_minutes=60,
    )
