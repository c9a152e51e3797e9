from datetime import datetime

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId, Customer
from services.catalog.domain.value_object.checkout_selection import CheckoutSelection
from services.shared.domain import EventDate


class BookingFactory:
    """予約ファクトリ

    合計金額はサーバー側で、読み込んだ時点のパッケージ価格と
    アドオン価格から計算する。
    """

    def create(
        self,
        selection: CheckoutSelection,
        event_date: EventDate,
        customer: Customer,
        created_at: datetime,
    ) -> Booking:
        """支払い待ちの新規予約を生成する"""
        total = selection.package_price
        for add_on in selection.add_ons:
            total = total.add(add_on.price)

        return Booking(
            id=BookingId.generate(),
            tenant_id=selection.tenant_id,
            package_id=selection.package_id,
            package_title=selection.package_title,
            event_date=event_date,
            customer=customer,
            add_on_ids=tuple(a.add_on_id for a in selection.add_ons),
            add_on_titles=tuple(a.title for a in selection.add_ons),
            total=total,
            created_at=created_at,
            status=BookingStatus.PENDING_PAYMENT,
        )
