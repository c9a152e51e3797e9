import json
from unittest.mock import patch

import pytest
import stripe

from services.booking.domain.enum import PaymentStatus
from services.booking.domain.exception import InvalidWebhookSignatureException
from services.booking.infrastructure import StripeWebhookParser
from services.shared.domain import TenantId


@pytest.fixture
def parser():
    return StripeWebhookParser(secret_loader=lambda: "whsec_test")


@pytest.fixture
def create_payload():
    """Stripe イベントの JSON を生成する Factory fixture"""

    def _factory(
        event_type: str = "checkout.session.completed",
        payment_status: str = "paid",
        metadata: dict | None = None,
    ) -> str:
        return json.dumps(
            {
                "id": "evt_1",
                "type": event_type,
                "data": {
                    "object": {
                        "id": "cs_test_1",
                        "payment_status": payment_status,
                        "metadata": (
                            {"tenant_id": "acme", "booking_id": "bk-1"}
                            if metadata is None
                            else metadata
                        ),
                    }
                },
            }
        )

    return _factory


@patch("stripe.WebhookSignature.verify_header")
class TestStripeWebhookParser:
    """StripeWebhookParser のテスト"""

    def test_completed_paid_session(self, mock_verify, parser, create_payload):
        # Arrange
        payload = create_payload()

        # Act
        notification = parser.parse(payload, "t=1,v1=abc")

        # Assert
        assert notification.event_id == "evt_1"
        assert notification.tenant_id == TenantId("acme")
        assert notification.session_reference == "cs_test_1"
        assert notification.payment_status == PaymentStatus.SUCCEEDED
        mock_verify.assert_called_once_with(payload, "t=1,v1=abc", "whsec_test", tolerance=300)

    @pytest.mark.parametrize(
        ("event_type", "payment_status", "expected"),
        [
            ("checkout.session.async_payment_succeeded", "paid", PaymentStatus.SUCCEEDED),
            ("checkout.session.async_payment_failed", "unpaid", PaymentStatus.FAILED),
            ("checkout.session.expired", "unpaid", PaymentStatus.CANCELLED),
        ],
    )
    def test_event_types(self, mock_verify, parser, create_payload, event_type, payment_status, expected):
        notification = parser.parse(create_payload(event_type, payment_status), "sig")

        assert notification.payment_status == expected

    def test_completed_but_unpaid_is_ignored(self, mock_verify, parser, create_payload):
        """非同期決済の completed は入金前なので処理しない"""
        assert parser.parse(create_payload(payment_status="unpaid"), "sig") is None

    def test_unrelated_event_is_ignored(self, mock_verify, parser, create_payload):
        assert parser.parse(create_payload(event_type="invoice.paid"), "sig") is None

    @pytest.mark.parametrize("metadata", [{}, {"tenant_id": "bad:tenant"}])
    def test_missing_or_invalid_tenant_is_kept_without_tenant(self, mock_verify, parser, create_payload, metadata):
        """テナント不明でも決済通知として照合に回す"""
        notification = parser.parse(create_payload(metadata=metadata), "sig")

        assert notification.tenant_id is None
        assert notification.session_reference == "cs_test_1"
        assert notification.payment_status == PaymentStatus.SUCCEEDED

    def test_invalid_signature(self, mock_verify, parser, create_payload):
        mock_verify.side_effect = stripe.SignatureVerificationError("bad", "sig")

        with pytest.raises(InvalidWebhookSignatureException):
            parser.parse(create_payload(), "sig")

    def test_missing_signature(self, mock_verify, parser, create_payload):
        with pytest.raises(InvalidWebhookSignatureException, match="Missing"):
            parser.parse(create_payload(), None)
        mock_verify.assert_not_called()
