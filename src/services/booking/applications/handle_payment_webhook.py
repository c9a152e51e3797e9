from dataclasses import dataclass

from aws_lambda_powertools import Logger

from services.booking.domain.entity import Booking
from services.booking.domain.enum import (
    BookingStatus,
    CancellationReason,
    PaymentStatus,
    WebhookOutcome,
)
from services.booking.domain.exception import (
    DateAlreadyConfirmedException,
    WebhookAlreadyProcessedException,
)
from services.booking.domain.repository import BookingRepository, WebhookLedger
from services.booking.domain.value_object import WebhookLedgerEntry
from services.shared.domain import TenantId
from services.shared.domain.exception import OptimisticLockException
from services.shared.event_bus import DomainEventBus
from services.shared.utils import TenantClock

logger = Logger(child=True)


@dataclass(frozen=True)
class WebhookResult:
    outcome: WebhookOutcome
    booking_id: str | None = None


class HandlePaymentWebhookService:
    """決済 Webhook の照合ユースケース（イベント単位で厳密に1回適用）

    - 台帳にあるイベントは何もしない
    - 予約の状態遷移と台帳への記録は同一トランザクション
    - 同じ日付が既に確定済みなら、この予約は date_conflict でキャンセルし
      手動照合のために CONFLICT を返す
    - BookingPaid はコミット後に発行する

    ストア・ネットワークの例外はそのまま送出し、ゲートウェイの再送に任せる。
    """

    def __init__(
        self,
        repository: BookingRepository,
        ledger: WebhookLedger,
        event_bus: DomainEventBus,
        clock: TenantClock,
    ) -> None:
        self._repository = repository
        self._ledger = ledger
        self._event_bus = event_bus
        self._clock = clock

    def handle_payment_webhook(
        self,
        event_id: str,
        tenant_id: TenantId | None,
        session_reference: str,
        payment_status: PaymentStatus,
    ) -> WebhookResult:
        """tenant_id が None なのはメタデータからテナントを特定できなかった通知"""
        log_keys = {
            "event_id": event_id,
            "tenant_id": str(tenant_id) if tenant_id else None,
            "session_id": session_reference,
            "payment_status": payment_status.value,
        }

        if self._ledger.contains(tenant_id, event_id):
            logger.info("Webhook event already processed", extra=log_keys)
            return WebhookResult(WebhookOutcome.DUPLICATE)

        if tenant_id is None:
            return self._unattributed(event_id, payment_status, log_keys)

        booking = self._repository.find_by_session(tenant_id, session_reference)
        if booking is None:
            logger.warning("Webhook for unknown checkout session", extra=log_keys)
            return self._record_only(
                event_id, tenant_id, WebhookOutcome.UNKNOWN_SESSION, None
            )

        log_keys["booking_id"] = str(booking.id)
        if not booking.is_pending:
            return self._settled(booking, event_id, payment_status, log_keys)

        if payment_status == PaymentStatus.SUCCEEDED:
            return self._confirm(booking, event_id, log_keys)
        return self._cancel(
            booking,
            event_id,
            CancellationReason.PAYMENT_FAILED,
            WebhookOutcome.CANCELLED,
            log_keys,
        )

    def _confirm(self, booking: Booking, event_id: str, log_keys: dict) -> WebhookResult:
        booking.confirm(at=self._clock.now())
        entry = self._entry(event_id, booking.tenant_id, WebhookOutcome.CONFIRMED, booking)
        try:
            self._repository.confirm(booking, entry)
        except WebhookAlreadyProcessedException:
            booking.flush_domain_events()
            logger.info("Webhook event processed concurrently", extra=log_keys)
            return WebhookResult(WebhookOutcome.DUPLICATE, str(booking.id))
        except DateAlreadyConfirmedException:
            booking.flush_domain_events()
            return self._resolve_date_conflict(booking, event_id, log_keys)

        logger.info("Booking confirmed", extra=log_keys)
        self._event_bus.publish_all(booking.flush_domain_events())
        return WebhookResult(WebhookOutcome.CONFIRMED, str(booking.id))

    def _resolve_date_conflict(
        self, booking: Booking, event_id: str, log_keys: dict
    ) -> WebhookResult:
        """確定に失敗した（同じ日付が確定済み）予約をキャンセルする"""
        current = self._repository.find_by_id(booking.tenant_id, booking.id)
        if current is None or not current.is_pending:
            if self._ledger.contains(booking.tenant_id, event_id):
                logger.info("Webhook event processed concurrently", extra=log_keys)
                return WebhookResult(WebhookOutcome.DUPLICATE, str(booking.id))
            raise OptimisticLockException(
                f"Booking changed while resolving a date conflict: {booking.id}"
            )
        result = self._cancel(
            current,
            event_id,
            CancellationReason.DATE_CONFLICT,
            WebhookOutcome.CONFLICT,
            log_keys,
        )
        if result.outcome == WebhookOutcome.CONFLICT:
            logger.error(
                "Payment succeeded for a date that is already confirmed, "
                "manual reconciliation required",
                extra={**log_keys, "event_date": str(current.event_date)},
            )
        return result

    def _cancel(
        self,
        booking: Booking,
        event_id: str,
        reason: CancellationReason,
        outcome: WebhookOutcome,
        log_keys: dict,
    ) -> WebhookResult:
        booking.cancel(reason, at=self._clock.now())
        entry = self._entry(event_id, booking.tenant_id, outcome, booking)
        try:
            self._repository.cancel(booking, entry)
        except WebhookAlreadyProcessedException:
            logger.info("Webhook event processed concurrently", extra=log_keys)
            return WebhookResult(WebhookOutcome.DUPLICATE, str(booking.id))

        logger.info(
            "Booking cancelled", extra={**log_keys, "reason": reason.value}
        )
        return WebhookResult(outcome, str(booking.id))

    def _settled(
        self,
        booking: Booking,
        event_id: str,
        payment_status: PaymentStatus,
        log_keys: dict,
    ) -> WebhookResult:
        """既に終端状態の予約への通知（状態は変えずに台帳だけ記録する）"""
        if (
            booking.status == BookingStatus.CANCELLED
            and payment_status == PaymentStatus.SUCCEEDED
        ):
            logger.error(
                "Payment succeeded for a cancelled booking, "
                "manual reconciliation required",
                extra={
                    **log_keys,
                    "cancellation_reason": (
                        booking.cancellation_reason.value
                        if booking.cancellation_reason
                        else None
                    ),
                },
            )
            outcome = WebhookOutcome.CONFLICT
        else:
            logger.info(
                "Webhook for a settled booking",
                extra={**log_keys, "status": booking.status.value},
            )
            outcome = WebhookOutcome.ALREADY_SETTLED
        return self._record_only(event_id, booking.tenant_id, outcome, booking)

    def _unattributed(
        self, event_id: str, payment_status: PaymentStatus, log_keys: dict
    ) -> WebhookResult:
        """テナントを特定できない通知（予約に紐付けられないので台帳だけ記録する）"""
        if payment_status == PaymentStatus.SUCCEEDED:
            logger.error(
                "Payment succeeded for a session without a tenant, "
                "manual reconciliation required",
                extra=log_keys,
            )
        else:
            logger.warning("Webhook for a session without a tenant", extra=log_keys)
        return self._record_only(
            event_id, None, WebhookOutcome.UNKNOWN_SESSION, None
        )

    def _record_only(
        self,
        event_id: str,
        tenant_id: TenantId | None,
        outcome: WebhookOutcome,
        booking: Booking | None,
    ) -> WebhookResult:
        booking_id = str(booking.id) if booking else None
        try:
            self._ledger.record(self._entry(event_id, tenant_id, outcome, booking))
        except WebhookAlreadyProcessedException:
            return WebhookResult(WebhookOutcome.DUPLICATE, booking_id)
        return WebhookResult(outcome, booking_id)

    def _entry(
        self,
        event_id: str,
        tenant_id: TenantId | None,
        outcome: WebhookOutcome,
        booking: Booking | None,
    ) -> WebhookLedgerEntry:
        return WebhookLedgerEntry(
            event_id=event_id,
            tenant_id=tenant_id,
            outcome=outcome,
            processed_at=self._clock.now(),
            booking_id=str(booking.id) if booking else None,
        )
