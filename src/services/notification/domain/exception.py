from services.shared.domain.exception import DomainException


class MailDeliveryException(DomainException):
    """メールの送信に失敗した"""

    pass
