from collections.abc import Callable
from dataclasses import dataclass

import stripe
from aws_lambda_powertools import Logger
from pydantic import BaseModel, ValidationError

from services.booking.domain.enum import PaymentStatus
from services.booking.domain.exception import InvalidWebhookSignatureException
from services.shared.domain import TenantId

logger = Logger(child=True)

SIGNATURE_TOLERANCE_SECONDS = 300


class CheckoutSessionObject(BaseModel):
    """Webhook に含まれる Checkout Session（必要な項目のみ）"""

    id: str
    payment_status: str | None = None
    metadata: dict[str, str] = {}


class StripeEventData(BaseModel):
    object: CheckoutSessionObject


class StripeEvent(BaseModel):
    id: str
    type: str
    data: StripeEventData


@dataclass(frozen=True)
class PaymentNotification:
    """ゲートウェイ非依存に正規化した決済通知"""

    event_id: str
    tenant_id: TenantId | None
    session_reference: str
    payment_status: PaymentStatus


def _status_for(event: StripeEvent) -> PaymentStatus | None:
    session = event.data.object
    if event.type == "checkout.session.completed":
        # 非同期決済は completed の時点では未入金
        return PaymentStatus.SUCCEEDED if session.payment_status == "paid" else None
    if event.type == "checkout.session.async_payment_succeeded":
        return PaymentStatus.SUCCEEDED
    if event.type == "checkout.session.async_payment_failed":
        return PaymentStatus.FAILED
    if event.type == "checkout.session.expired":
        return PaymentStatus.CANCELLED
    return None


class StripeWebhookParser:
    """Stripe Webhook の署名検証と正規化"""

    def __init__(self, secret_loader: Callable[[], str]) -> None:
        self._secret_loader = secret_loader

    def parse(self, payload: str, signature: str | None) -> PaymentNotification | None:
        """通知を正規化する（処理対象外のイベントなら None）

        Raises:
            InvalidWebhookSignatureException: 署名が不正な場合
        """
        if not signature:
            raise InvalidWebhookSignatureException("Missing Stripe-Signature header")
        try:
            stripe.WebhookSignature.verify_header(
                payload,
                signature,
                self._secret_loader(),
                tolerance=SIGNATURE_TOLERANCE_SECONDS,
            )
        except stripe.SignatureVerificationError as e:
            raise InvalidWebhookSignatureException(
                "Invalid Stripe webhook signature"
            ) from e

        try:
            event = StripeEvent.model_validate_json(payload)
        except ValidationError:
            logger.warning("Ignoring webhook with an unexpected payload shape")
            return None

        status = _status_for(event)
        if status is None:
            logger.info(
                "Ignoring webhook event",
                extra={"event_id": event.id, "event_type": event.type},
            )
            return None

        raw_tenant = event.data.object.metadata.get("tenant_id")
        try:
            tenant_id = TenantId(value=raw_tenant or "")
        except ValueError:
            # テナント不明の通知として照合に回す
            logger.warning(
                "Webhook without a valid tenant_id in metadata",
                extra={"event_id": event.id, "event_type": event.type},
            )
            tenant_id = None

        return PaymentNotification(
            event_id=event.id,
            tenant_id=tenant_id,
            session_reference=event.data.object.id,
            payment_status=status,
        )
