from services.shared.domain.exception import DomainException


class DateUnavailableException(DomainException):
    """チェックアウト時点で日付が予約できない"""

    def __init__(self, message: str, reasons: list[str] | None = None) -> None:
        super().__init__(message)
        self.reasons = reasons or []


class DateAlreadyConfirmedException(DomainException):
    """同じ日付の確定予約が既に存在する（確定時の日付確保に失敗）"""

    pass


class WebhookAlreadyProcessedException(DomainException):
    """同じ Webhook イベントが並行して処理済みになった"""

    pass


class PaymentGatewayException(DomainException):
    """決済ゲートウェイがエラーを返した"""

    pass


class PaymentGatewayTimeoutException(PaymentGatewayException):
    """決済ゲートウェイへの通信が失敗またはタイムアウトした（結果不明）"""

    pass


class InvalidWebhookSignatureException(DomainException):
    """Webhook の署名検証に失敗した"""

    pass
