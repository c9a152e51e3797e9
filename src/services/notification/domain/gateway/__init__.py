from .mail_sender import BookingConfirmationDetails as BookingConfirmationDetails
from .mail_sender import MailSender as MailSender
