from services.shared.domain.exception import DomainException


class InvalidDateRangeException(DomainException):
    """日付範囲が不正（終了日が開始日より前、または上限日数を超える）"""

    pass


class ProviderUnavailableException(DomainException):
    """外部カレンダーが利用できない（エラー応答・不正な応答・通信エラー）"""

    pass


class ProviderTimeoutException(ProviderUnavailableException):
    """外部カレンダーへの問い合わせがタイムアウトした"""

    pass
