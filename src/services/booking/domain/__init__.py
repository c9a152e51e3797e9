from .entity import Booking as Booking
from .enum import BookingStatus as BookingStatus
from .enum import CancellationReason as CancellationReason
from .enum import PaymentStatus as PaymentStatus
from .enum import WebhookOutcome as WebhookOutcome
from .event import BookingPaid as BookingPaid
from .factory import BookingFactory as BookingFactory
from .gateway import PaymentGateway as PaymentGateway
from .repository import BookingRepository as BookingRepository
from .repository import WebhookLedger as WebhookLedger
from .value_object import BookingId as BookingId
from .value_object import CheckoutSession as CheckoutSession
from .value_object import Customer as Customer
from .value_object import WebhookLedgerEntry as WebhookLedgerEntry
