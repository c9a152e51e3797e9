from services.booking.domain.entity import Booking
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain import TenantId
from services.shared.domain.exception import ResourceNotFoundException


class BookingQueryService:
    """予約の参照ユースケース（管理画面向け）"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def list_bookings(self, tenant_id: TenantId) -> list[Booking]:
        """新しい順の予約一覧"""
        bookings = self._repository.list_for_tenant(tenant_id)
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def get_booking(self, tenant_id: TenantId, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(tenant_id, booking_id)
        if booking is None or booking.tenant_id != tenant_id:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking
