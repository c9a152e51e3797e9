import json
from unittest.mock import MagicMock

import pytest
from aws_lambda_powertools.metrics import MetricUnit

from services.booking.applications import WebhookResult
from services.booking.domain.enum import PaymentStatus, WebhookOutcome
from services.booking.domain.exception import InvalidWebhookSignatureException
from services.booking.handlers import payment_webhook
from services.booking.infrastructure import PaymentNotification
from services.shared.domain import TenantId
from tests.unit.services.fakes import http_api_event

NOTIFICATION = PaymentNotification(
    event_id="evt_1",
    tenant_id=TenantId("acme"),
    session_reference="cs_test_1",
    payment_status=PaymentStatus.SUCCEEDED,
)


@pytest.fixture
def parser(monkeypatch):
    parser = MagicMock()
    monkeypatch.setattr(payment_webhook, "parser", parser)
    return parser


@pytest.fixture
def service(monkeypatch):
    service = MagicMock()
    monkeypatch.setattr(payment_webhook, "service", service)
    return service


def _invoke(lambda_context, signature: str | None = "t=1,v1=abc"):
    event = http_api_event(
        "POST",
        "/webhooks/payments",
        body='{"id": "evt_1"}',
        headers={"stripe-signature": signature} if signature else None,
    )
    return payment_webhook.lambda_handler(event, lambda_context)


class TestPaymentWebhookHandler:
    """決済 Webhook Lambda Handler のテスト"""

    def test_processed_event_returns_200(self, parser, service, lambda_context):
        # Arrange
        parser.parse.return_value = NOTIFICATION
        service.handle_payment_webhook.return_value = WebhookResult(
            WebhookOutcome.CONFIRMED, "bk-1"
        )

        # Act
        response = _invoke(lambda_context)

        # Assert
        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"received": True, "outcome": "confirmed"}
        parser.parse.assert_called_once_with('{"id": "evt_1"}', "t=1,v1=abc")
        service.handle_payment_webhook.assert_called_once_with(
            event_id="evt_1",
            tenant_id=TenantId("acme"),
            session_reference="cs_test_1",
            payment_status=PaymentStatus.SUCCEEDED,
        )

    @pytest.mark.parametrize(
        "outcome",
        [WebhookOutcome.DUPLICATE, WebhookOutcome.CONFLICT, WebhookOutcome.UNKNOWN_SESSION],
    )
    def test_handled_outcomes_are_acknowledged(self, parser, service, lambda_context, outcome):
        """再送を止めるため、処理済みの結果はすべて 200"""
        parser.parse.return_value = NOTIFICATION
        service.handle_payment_webhook.return_value = WebhookResult(outcome)

        response = _invoke(lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["outcome"] == outcome.value

    def test_event_without_tenant_is_reconciled_and_measured(self, parser, service, lambda_context, monkeypatch):
        """テナント不明の決済通知も照合に回し、UnknownWebhookSession を計測する"""
        # Arrange
        add_metric = MagicMock()
        monkeypatch.setattr(payment_webhook.metrics, "add_metric", add_metric)
        parser.parse.return_value = PaymentNotification(
            event_id="evt_orphan",
            tenant_id=None,
            session_reference="cs_orphan",
            payment_status=PaymentStatus.SUCCEEDED,
        )
        service.handle_payment_webhook.return_value = WebhookResult(
            WebhookOutcome.UNKNOWN_SESSION
        )

        # Act
        response = _invoke(lambda_context)

        # Assert
        assert response["statusCode"] == 200
        assert json.loads(response["body"])["outcome"] == "unknown_session"
        assert service.handle_payment_webhook.call_args.kwargs["tenant_id"] is None
        add_metric.assert_called_once_with(
            name="UnknownWebhookSession", unit=MetricUnit.Count, value=1
        )

    def test_ignored_event_returns_200(self, parser, service, lambda_context):
        parser.parse.return_value = None

        response = _invoke(lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["outcome"] == "ignored"
        service.handle_payment_webhook.assert_not_called()

    def test_invalid_signature_returns_400(self, parser, service, lambda_context):
        parser.parse.side_effect = InvalidWebhookSignatureException("Invalid Stripe webhook signature")

        response = _invoke(lambda_context)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["error_code"] == "INVALID_SIGNATURE"
        service.handle_payment_webhook.assert_not_called()

    def test_processing_failure_returns_500_for_redelivery(self, parser, service, lambda_context):
        parser.parse.return_value = NOTIFICATION
        service.handle_payment_webhook.side_effect = ConnectionError("store unavailable")

        response = _invoke(lambda_context)

        body = json.loads(response["body"])
        assert response["statusCode"] == 500
        assert body["retryable"] is True
