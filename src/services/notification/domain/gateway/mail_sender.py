from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from services.shared.domain import Money


@dataclass(frozen=True)
class BookingConfirmationDetails:
    """予約確定メールの差し込み内容"""

    booking_id: str
    customer_name: str
    event_date: date
    package_title: str
    add_on_titles: tuple[str, ...]
    total: Money


class MailSender(ABC):
    """メール送信のインターフェース"""

    @abstractmethod
    def send_booking_confirmation(
        self, email: str, details: BookingConfirmationDetails
    ) -> None:
        """Raises: MailDeliveryException"""
        raise NotImplementedError
