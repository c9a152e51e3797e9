from .send_booking_confirmation import (
    SendBookingConfirmation as SendBookingConfirmation,
)
