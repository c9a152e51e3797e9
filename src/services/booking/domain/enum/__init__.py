from .booking_status import BookingStatus as BookingStatus
from .cancellation_reason import CancellationReason as CancellationReason
from .payment_status import PaymentStatus as PaymentStatus
from .webhook_outcome import WebhookOutcome as WebhookOutcome
