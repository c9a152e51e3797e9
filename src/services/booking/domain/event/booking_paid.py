from dataclasses import dataclass
from datetime import date
from typing import ClassVar

from services.shared.domain import DomainEvent, Money


@dataclass(frozen=True)
class BookingPaid(DomainEvent):
    """予約の支払いが完了し、確定した"""

    event_name: ClassVar[str] = "BookingPaid"

    booking_id: str
    tenant_id: str
    email: str
    customer_name: str
    event_date: date
    package_title: str
    add_on_titles: tuple[str, ...]
    total: Money
