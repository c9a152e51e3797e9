from collections.abc import Callable
from datetime import datetime

import stripe
from aws_lambda_powertools import Logger

from services.booking.domain.exception import (
    PaymentGatewayException,
    PaymentGatewayTimeoutException,
)
from services.booking.domain.gateway import PaymentGateway
from services.booking.domain.value_object import CheckoutSession
from services.shared.domain import Money, TenantId

logger = Logger(child=True)


def configure_stripe(timeout_seconds: int, max_network_retries: int = 1) -> None:
    """Stripe SDK の HTTP クライアント（タイムアウト・リトライ）を設定する"""
    stripe.default_http_client = stripe.RequestsClient(timeout=timeout_seconds)
    stripe.max_network_retries = max_network_retries


class StripePaymentGateway(PaymentGateway):
    """Stripe Checkout を使用した PaymentGateway の具象実装

    シークレットキーは初回利用時に api_key_loader から取得する。
    予約IDを冪等キーにするため、結果不明の失敗は同じ予約で再試行できる。
    """

    def __init__(self, api_key_loader: Callable[[], str]) -> None:
        self._api_key_loader = api_key_loader

    def create_checkout_session(
        self,
        tenant_id: TenantId,
        amount: Money,
        description: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
        idempotency_key: str,
        customer_email: str,
        expires_at: datetime,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self._api_key_loader(),
                idempotency_key=idempotency_key,
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": amount.currency.code.lower(),
                            "unit_amount": amount.amount,
                            "product_data": {"name": description},
                        },
                        "quantity": 1,
                    }
                ],
                customer_email=customer_email,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
                payment_intent_data={"metadata": metadata},
                expires_at=int(expires_at.timestamp()),
            )
        except stripe.APIConnectionError as e:
            logger.warning(
                "Stripe connection failed",
                extra={"tenant_id": str(tenant_id), "idempotency_key": idempotency_key},
            )
            raise PaymentGatewayTimeoutException(
                f"Payment gateway did not respond: {e.user_message or e}"
            ) from e
        except stripe.StripeError as e:
            logger.error(
                "Stripe rejected checkout session",
                extra={
                    "tenant_id": str(tenant_id),
                    "idempotency_key": idempotency_key,
                    "stripe_code": e.code,
                    "http_status": e.http_status,
                },
            )
            raise PaymentGatewayException(
                f"Payment gateway error: {e.user_message or e}"
            ) from e

        return CheckoutSession(session_id=session.id, checkout_url=session.url)
