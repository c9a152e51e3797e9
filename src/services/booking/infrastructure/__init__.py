from .dynamodb_booking_repository import (
    DynamoDBBookingRepository as DynamoDBBookingRepository,
)
from .dynamodb_webhook_ledger import DynamoDBWebhookLedger as DynamoDBWebhookLedger
from .stripe_payment_gateway import StripePaymentGateway as StripePaymentGateway
from .stripe_payment_gateway import configure_stripe as configure_stripe
from .stripe_webhook_parser import PaymentNotification as PaymentNotification
from .stripe_webhook_parser import StripeWebhookParser as StripeWebhookParser
from .payment_gateway_factory import build_payment_gateway as build_payment_gateway
from .payment_gateway_factory import build_webhook_parser as build_webhook_parser
