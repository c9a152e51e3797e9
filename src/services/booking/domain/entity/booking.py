from datetime import datetime

from services.booking.domain.enum import BookingStatus, CancellationReason
from services.booking.domain.event import BookingPaid
from services.booking.domain.value_object import BookingId, Customer
from services.catalog.domain.value_object import AddOnId, PackageId
from services.shared.domain import AggregateRoot, EventDate, Money, TenantId
from services.shared.domain.exception import BusinessRuleViolationException


class Booking(AggregateRoot[BookingId]):
    """予約エンティティ

    パッケージ名・アドオン名・合計金額はチェックアウト時点の値を保持する。
    """

    def __init__(
        self,
        id: BookingId,
        tenant_id: TenantId,
        package_id: PackageId,
        package_title: str,
        event_date: EventDate,
        customer: Customer,
        add_on_ids: tuple[AddOnId, ...],
        add_on_titles: tuple[str, ...],
        total: Money,
        created_at: datetime,
        updated_at: datetime | None = None,
        status: BookingStatus = BookingStatus.PENDING_PAYMENT,
        checkout_session_id: str | None = None,
        cancellation_reason: CancellationReason | None = None,
    ) -> None:
        super().__init__(id)
        self._tenant_id = tenant_id
        self._package_id = package_id
        self._package_title = package_title
        self._event_date = event_date
        self._customer = customer
        self._add_on_ids = add_on_ids
        self._add_on_titles = add_on_titles
        self._total = total
        self._created_at = created_at
        self._updated_at = updated_at or created_at
        self._status = status
        self._checkout_session_id = checkout_session_id
        self._cancellation_reason = cancellation_reason

    @property
    def tenant_id(self) -> TenantId:
        return self._tenant_id

    @property
    def package_id(self) -> PackageId:
        return self._package_id

    @property
    def package_title(self) -> str:
        return self._package_title

    @property
    def event_date(self) -> EventDate:
        return self._event_date

    @property
    def customer(self) -> Customer:
        return self._customer

    @property
    def add_on_ids(self) -> tuple[AddOnId, ...]:
        return self._add_on_ids

    @property
    def add_on_titles(self) -> tuple[str, ...]:
        return self._add_on_titles

    @property
    def total(self) -> Money:
        return self._total

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def checkout_session_id(self) -> str | None:
        return self._checkout_session_id

    @property
    def cancellation_reason(self) -> CancellationReason | None:
        return self._cancellation_reason

    @property
    def is_pending(self) -> bool:
        return self._status == BookingStatus.PENDING_PAYMENT

    def attach_checkout_session(self, session_id: str, at: datetime) -> None:
        """チェックアウトセッションを紐付ける"""
        if not self.is_pending:
            raise BusinessRuleViolationException(
                f"Cannot attach a checkout session to a {self._status.value} booking"
            )
        self._checkout_session_id = session_id
        self._updated_at = at

    def confirm(self, at: datetime) -> None:
        """支払い完了により予約を確定する"""
        if not self.is_pending:
            raise BusinessRuleViolationException(
                f"Cannot confirm booking in {self._status.value} status"
            )
        self._status = BookingStatus.CONFIRMED
        self._updated_at = at
        self.add_domain_event(
            BookingPaid(
                booking_id=str(self.id),
                tenant_id=str(self._tenant_id),
                email=self._customer.email,
                customer_name=self._customer.name,
                event_date=self._event_date.value,
                package_title=self._package_title,
                add_on_titles=self._add_on_titles,
                total=self._total,
            )
        )

    def cancel(self, reason: CancellationReason, at: datetime) -> None:
        """予約をキャンセルする"""
        if self._status == BookingStatus.CANCELLED:
            return
        if self._status == BookingStatus.CONFIRMED:
            raise BusinessRuleViolationException("Cannot cancel a confirmed booking")
        self._status = BookingStatus.CANCELLED
        self._cancellation_reason = reason
        self._updated_at = at
