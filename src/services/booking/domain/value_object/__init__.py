from .booking_id import BookingId as BookingId
from .checkout_session import CheckoutSession as CheckoutSession
from .customer import Customer as Customer
from .webhook_ledger_entry import WebhookLedgerEntry as WebhookLedgerEntry
