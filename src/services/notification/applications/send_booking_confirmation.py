from aws_lambda_powertools import Logger

from services.booking.domain.event import BookingPaid
from services.notification.domain.gateway import (
    BookingConfirmationDetails,
    MailSender,
)

logger = Logger(child=True)


class SendBookingConfirmation:
    """BookingPaid の購読者: 予約確定メールを送る

    送信失敗はイベントバスがログに記録し、予約の状態には影響しない。
    """

    def __init__(self, mail_sender: MailSender) -> None:
        self._mail_sender = mail_sender

    def __call__(self, event: BookingPaid) -> None:
        details = BookingConfirmationDetails(
            booking_id=event.booking_id,
            customer_name=event.customer_name,
            event_date=event.event_date,
            package_title=event.package_title,
            add_on_titles=event.add_on_titles,
            total=event.total,
        )
        self._mail_sender.send_booking_confirmation(event.email, details)
        logger.info(
            "Booking confirmation sent",
            extra={"tenant_id": event.tenant_id, "booking_id": event.booking_id},
        )
