from aws_lambda_powertools.utilities import parameters

from services.booking.infrastructure.stripe_payment_gateway import (
    StripePaymentGateway,
    configure_stripe,
)
from services.booking.infrastructure.stripe_webhook_parser import StripeWebhookParser
from services.shared.config import Settings

SECRET_MAX_AGE_SECONDS = 300


def _secret_loader(name: str | None):
    if not name:
        raise ValueError("Stripe secret name is not configured")

    def load() -> str:
        return parameters.get_secret(name, max_age=SECRET_MAX_AGE_SECONDS)

    return load


def build_payment_gateway(settings: Settings) -> StripePaymentGateway:
    configure_stripe(timeout_seconds=settings.stripe_timeout_seconds)
    return StripePaymentGateway(api_key_loader=_secret_loader(settings.stripe_secret_name))


def build_webhook_parser(settings: Settings) -> StripeWebhookParser:
    return StripeWebhookParser(
        secret_loader=_secret_loader(settings.stripe_webhook_secret_name)
    )
