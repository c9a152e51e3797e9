from botocore.exceptions import ClientError

from services.booking.domain.exception import WebhookAlreadyProcessedException
from services.booking.domain.repository import WebhookLedger
from services.booking.domain.value_object import WebhookLedgerEntry
from services.shared.domain import TenantId
from services.shared.utils.aws import is_conditional_check_failed

UNATTRIBUTED_PK = "WEBHOOK#UNATTRIBUTED"


def ledger_pk(tenant_id: TenantId | None) -> str:
    return f"TENANT#{tenant_id}" if tenant_id else UNATTRIBUTED_PK


def ledger_item(entry: WebhookLedgerEntry) -> dict:
    """台帳エントリの DynamoDB アイテム（予約のトランザクションからも使う）"""
    item = {
        "PK": ledger_pk(entry.tenant_id),
        "SK": f"WEBHOOK#{entry.event_id}",
        "entity_type": "WEBHOOK",
        "event_id": entry.event_id,
        "outcome": entry.outcome.value,
        "processed_at": entry.processed_at.isoformat(),
    }
    if entry.tenant_id is not None:
        item["tenant_id"] = str(entry.tenant_id)
    if entry.booking_id is not None:
        item["booking_id"] = entry.booking_id
    return item


class DynamoDBWebhookLedger(WebhookLedger):
    """DynamoDB を使用した WebhookLedger の具象実装"""

    def __init__(self, table) -> None:
        self.table = table

    def contains(self, tenant_id: TenantId | None, event_id: str) -> bool:
        response = self.table.get_item(
            Key={"PK": ledger_pk(tenant_id), "SK": f"WEBHOOK#{event_id}"},
            ConsistentRead=True,
            ProjectionExpression="PK",
        )
        return "Item" in response

    def record(self, entry: WebhookLedgerEntry) -> None:
        try:
            self.table.put_item(
                Item=ledger_item(entry),
                ConditionExpression="attribute_not_exists(PK)",
            )
        except ClientError as e:
            if is_conditional_check_failed(e):
                raise WebhookAlreadyProcessedException(
                    f"Webhook event already recorded: {entry.event_id}"
                ) from e
            raise
