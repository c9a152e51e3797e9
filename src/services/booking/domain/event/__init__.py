from .booking_paid import BookingPaid as BookingPaid
