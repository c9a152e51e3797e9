class DomainException(Exception):
    """ドメイン層で発生する基底例外

    status_code を持つ例外だけが共通の HTTP エラーレスポンスに変換される。
    """

    status_code: int | None = None
    error_code: str = "DOMAIN_ERROR"


class ResourceNotFoundException(DomainException):
    """テナント内にリソースが存在しない場合"""

    status_code = 404
    error_code = "NOT_FOUND"


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合（例: 無効なアドオンの指定）"""

    status_code = 422
    error_code = "BUSINESS_RULE_VIOLATION"


class DuplicateResourceException(DomainException):
    """条件付き書き込みが既存アイテムと衝突した場合（スラッグ重複など）"""

    status_code = 409
    error_code = "CONFLICT"


class OptimisticLockException(DomainException):
    """予約のステータスが期待値と異なり、状態遷移できなかった場合"""

    status_code = 409
    error_code = "CONFLICT"
