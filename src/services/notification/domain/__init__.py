from .gateway import BookingConfirmationDetails as BookingConfirmationDetails
from .gateway import MailSender as MailSender
