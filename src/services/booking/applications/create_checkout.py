from dataclasses import dataclass
from datetime import timedelta

from aws_lambda_powertools import Logger

from services.availability.applications import AvailabilityService
from services.booking.domain.exception import (
    DateUnavailableException,
    PaymentGatewayException,
)
from services.booking.domain.factory import BookingFactory
from services.booking.domain.gateway import PaymentGateway
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId, Customer
from services.catalog.applications import CatalogService
from services.catalog.domain.value_object import AddOnId, PackageId
from services.shared.domain import EventDate, TenantId
from services.shared.utils import TenantClock

logger = Logger(child=True)


@dataclass(frozen=True)
class CheckoutResult:
    booking_id: BookingId
    checkout_url: str


class CreateCheckoutService:
    """チェックアウト作成ユースケース

    1. 書き込み時点で空き状況を再確認する
    2. 現在の価格をストアから読み込み、合計をサーバー側で計算する
    3. 支払い待ちの予約を保存してから決済ゲートウェイに問い合わせる
    4. セッションを予約に紐付け、チェックアウト URL を返す

    同じ日付の並行チェックアウトはどちらも保存され、確定時に決着する。
    """

    def __init__(
        self,
        availability: AvailabilityService,
        catalog: CatalogService,
        factory: BookingFactory,
        repository: BookingRepository,
        gateway: PaymentGateway,
        clock: TenantClock,
        public_base_url: str,
        session_ttl_minutes: int = 60,
    ) -> None:
        self._availability = availability
        self._catalog = catalog
        self._factory = factory
        self._repository = repository
        self._gateway = gateway
        self._clock = clock
        self._public_base_url = public_base_url.rstrip("/")
        self._session_ttl = timedelta(minutes=session_ttl_minutes)

    def create_checkout(
        self,
        tenant_id: TenantId,
        package_id: PackageId,
        event_date: EventDate,
        add_on_ids: list[AddOnId],
        customer: Customer,
    ) -> CheckoutResult:
        verdict = self._availability.get_availability(tenant_id, event_date.value)
        if not verdict.available:
            reasons = sorted(reason.value for reason in verdict.reasons)
            raise DateUnavailableException(
                f"Date is not available: {event_date}", reasons=reasons
            )

        selection = self._catalog.load_for_checkout(tenant_id, package_id, add_on_ids)
        now = self._clock.now()
        booking = self._factory.create(selection, event_date, customer, created_at=now)
        self._repository.save(booking)

        log_keys = {"tenant_id": str(tenant_id), "booking_id": str(booking.id)}
        logger.info(
            "Pending booking created",
            extra={**log_keys, "total": booking.total.amount, "event_date": str(event_date)},
        )

        try:
            session = self._gateway.create_checkout_session(
                tenant_id=tenant_id,
                amount=booking.total,
                description=_describe(booking.package_title, booking.add_on_titles),
                success_url=(
                    f"{self._public_base_url}/{tenant_id}/booking/success"
                    f"?booking_id={booking.id}"
                ),
                cancel_url=(
                    f"{self._public_base_url}/{tenant_id}/booking/cancelled"
                    f"?booking_id={booking.id}"
                ),
                metadata={"tenant_id": str(tenant_id), "booking_id": str(booking.id)},
                idempotency_key=str(booking.id),
                customer_email=customer.email,
                expires_at=now + self._session_ttl,
            )
        except PaymentGatewayException:
            logger.warning(
                "Checkout session could not be created, booking stays pending",
                extra=log_keys,
            )
            raise

        booking.attach_checkout_session(session.session_id, at=self._clock.now())
        self._repository.attach_checkout_session(booking)
        logger.info(
            "Checkout session attached",
            extra={**log_keys, "session_id": session.session_id},
        )
        return CheckoutResult(booking_id=booking.id, checkout_url=session.checkout_url)


def _describe(package_title: str, add_on_titles: tuple[str, ...]) -> str:
    if not add_on_titles:
        return package_title
    return f"{package_title} + {', '.join(add_on_titles)}"
