import json

from pydantic import BaseModel, ValidationError

from services.shared.domain.exception import DomainException


class ErrorResponse(BaseModel):
    """エラーレスポンスモデル"""

    status: str = "error"
    error_code: str
    message: str
    retryable: bool = False
    details: list | None = None


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway HTTP API のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    retryable: bool = False,
    details: list | None = None,
) -> dict:
    """エラーレスポンスを生成"""
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        retryable=retryable,
        details=details,
    ).model_dump(exclude_none=True)
    return api_response(status_code, body)


def to_error_response(e: Exception) -> dict | None:
    """共通のドメイン例外・入力エラーを HTTP レスポンスに変換する

    対応しない例外なら None を返す（呼び出し側で 500 にする）。
    """
    # ValidationError は ValueError のサブクラスなので先に判定する
    if isinstance(e, ValidationError):
        return error_response(
            400,
            "VALIDATION_ERROR",
            "Invalid request",
            details=e.errors(include_url=False, include_context=False),
        )
    if isinstance(e, ValueError):
        return error_response(400, "VALIDATION_ERROR", str(e))
    if isinstance(e, DomainException) and e.status_code is not None:
        return error_response(e.status_code, e.error_code, str(e))
    return None
