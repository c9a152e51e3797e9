import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from services.shared.config import Settings


def client_config(settings: Settings) -> Config:
    """AWS クライアント共通の設定（タイムアウト・リトライ）"""
    return Config(
        connect_timeout=settings.storage_connect_timeout_seconds,
        read_timeout=settings.storage_read_timeout_seconds,
        retries={"max_attempts": 3, "mode": "standard"},
    )


def dynamodb_table(settings: Settings):
    """設定済みの DynamoDB Table リソースを返す"""
    dynamodb = boto3.resource("dynamodb", config=client_config(settings))
    return dynamodb.Table(settings.table_name)


def query_all(table, **kwargs) -> list[dict]:
    """Query のページングを辿って全アイテムを返す"""
    items: list[dict] = []
    while True:
        response = table.query(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key


def is_conditional_check_failed(error: ClientError) -> bool:
    return error.response["Error"]["Code"] == "ConditionalCheckFailedException"


def cancellation_codes(error: ClientError) -> list[str] | None:
    """TransactWriteItems のキャンセル理由コードを項目順に返す

    トランザクションのキャンセル以外のエラーなら None。
    成功した項目のコードは "None" になる。
    """
    if error.response["Error"]["Code"] != "TransactionCanceledException":
        return None
    reasons = error.response.get("CancellationReasons", [])
    return [reason.get("Code", "None") for reason in reasons]
