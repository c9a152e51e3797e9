from .booking_query_service import BookingQueryService as BookingQueryService
from .create_checkout import CheckoutResult as CheckoutResult
from .create_checkout import CreateCheckoutService as CreateCheckoutService
from .expire_pending_bookings import (
    ExpirePendingBookingsService as ExpirePendingBookingsService,
)
from .handle_payment_webhook import (
    HandlePaymentWebhookService as HandlePaymentWebhookService,
)
from .handle_payment_webhook import WebhookResult as WebhookResult
