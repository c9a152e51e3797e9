import boto3
from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications import HandlePaymentWebhookService
from services.booking.domain.enum import WebhookOutcome
from services.booking.domain.event import BookingPaid
from services.booking.domain.exception import InvalidWebhookSignatureException
from services.booking.infrastructure import (
    DynamoDBBookingRepository,
    DynamoDBWebhookLedger,
    build_webhook_parser,
)
from services.notification.applications import SendBookingConfirmation
from services.notification.infrastructure import SesMailSender
from services.shared.config import Settings
from services.shared.event_bus import DomainEventBus
from services.shared.utils import TenantClock, api_response, error_response
from services.shared.utils.aws import client_config, dynamodb_table

logger = Logger()
metrics = Metrics()

settings = Settings.from_env()
table = dynamodb_table(settings)
clock = TenantClock(settings.default_timezone, settings.tenant_timezones)

event_bus = DomainEventBus()
if settings.mail_from_address:
    mail_sender = SesMailSender(
        client=boto3.client("sesv2", config=client_config(settings)),
        from_address=settings.mail_from_address,
    )
    event_bus.subscribe(BookingPaid, SendBookingConfirmation(mail_sender))
else:
    logger.warning("MAIL_FROM_ADDRESS is not set, confirmation mail is disabled")

parser = build_webhook_parser(settings)
service = HandlePaymentWebhookService(
    repository=DynamoDBBookingRepository(table),
    ledger=DynamoDBWebhookLedger(table),
    event_bus=event_bus,
    clock=clock,
)

_OUTCOME_METRICS = {
    WebhookOutcome.CONFLICT: "WebhookConflict",
    WebhookOutcome.UNKNOWN_SESSION: "UnknownWebhookSession",
    WebhookOutcome.DUPLICATE: "DuplicateWebhook",
}


@logger.inject_lambda_context
@metrics.log_metrics
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """決済 Webhook Lambda Handler（決済結果の唯一の入口）

    処理できた通知はすべて 200 を返す。想定外の失敗だけ 500 を返し、
    ゲートウェイの再送に任せる。
    """
    try:
        notification = parser.parse(
            event.decoded_body or "",
            event.get_header_value("stripe-signature"),
        )
    except InvalidWebhookSignatureException as e:
        logger.warning("Rejected webhook", extra={"reason": str(e)})
        return error_response(400, "INVALID_SIGNATURE", str(e))
    except Exception:
        logger.exception("Failed to verify payment webhook")
        return error_response(
            500, "INTERNAL_ERROR", "Internal server error", retryable=True
        )

    if notification is None:
        return api_response(200, {"received": True, "outcome": "ignored"})

    tenant_id = notification.tenant_id
    logger.append_keys(
        event_id=notification.event_id,
        tenant_id=str(tenant_id) if tenant_id else None,
    )
    try:
        result = service.handle_payment_webhook(
            event_id=notification.event_id,
            tenant_id=notification.tenant_id,
            session_reference=notification.session_reference,
            payment_status=notification.payment_status,
        )
    except Exception:
        logger.exception("Failed to process payment webhook")
        return error_response(
            500, "INTERNAL_ERROR", "Internal server error", retryable=True
        )

    metric_name = _OUTCOME_METRICS.get(result.outcome)
    if metric_name:
        metrics.add_metric(name=metric_name, unit=MetricUnit.Count, value=1)

    logger.info(
        "Payment webhook processed",
        extra={"outcome": result.outcome.value, "booking_id": result.booking_id},
    )
    return api_response(200, {"received": True, "outcome": result.outcome.value})
