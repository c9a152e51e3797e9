from .booking_repository import BookingRepository as BookingRepository
from .webhook_ledger import WebhookLedger as WebhookLedger
