from botocore.exceptions import ClientError

from services.notification.domain.exception import MailDeliveryException
from services.notification.domain.gateway import (
    BookingConfirmationDetails,
    MailSender,
)


def _format_amount(details: BookingConfirmationDetails) -> str:
    total = details.total
    return f"{total.amount / 100:,.2f} {total.currency}"


def render_booking_confirmation(details: BookingConfirmationDetails) -> tuple[str, str]:
    """件名と本文（テキスト）を生成する"""
    subject = f"Booking confirmed: {details.package_title} on {details.event_date.isoformat()}"
    lines = [
        f"Hi {details.customer_name},",
        "",
        "Your booking is confirmed.",
        "",
        f"Booking: {details.booking_id}",
        f"Date: {details.event_date.isoformat()}",
        f"Package: {details.package_title}",
    ]
    if details.add_on_titles:
        lines.append(f"Add-ons: {', '.join(details.add_on_titles)}")
    lines.append(f"Total paid: {_format_amount(details)}")
    return subject, "\n".join(lines)


class SesMailSender(MailSender):
    """Amazon SES (v2) を使用した MailSender の具象実装"""

    def __init__(self, client, from_address: str) -> None:
        self._client = client
        self._from_address = from_address

    def send_booking_confirmation(
        self, email: str, details: BookingConfirmationDetails
    ) -> None:
        subject, body = render_booking_confirmation(details)
        try:
            self._client.send_email(
                FromEmailAddress=self._from_address,
                Destination={"ToAddresses": [email]},
                Content={
                    "Simple": {
                        "Subject": {"Data": subject, "Charset": "UTF-8"},
                        "Body": {"Text": {"Data": body, "Charset": "UTF-8"}},
                    }
                },
            )
        except ClientError as e:
            raise MailDeliveryException(
                f"Failed to send booking confirmation for {details.booking_id}: "
                f"{e.response['Error']['Code']}"
            ) from e
