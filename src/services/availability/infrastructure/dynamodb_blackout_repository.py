from datetime import date

from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from services.availability.domain.entity import Blackout
from services.availability.domain.repository import BlackoutRepository
from services.availability.domain.value_object import BlackoutId, DateRange
from services.shared.domain import EventDate, TenantId
from services.shared.domain.exception import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from services.shared.utils.aws import is_conditional_check_failed, query_all


class DynamoDBBlackoutRepository(BlackoutRepository):
    """DynamoDB を使用した BlackoutRepository の具象実装

    SK に日付を含めるため、(テナント, 日付) の一意性はキーで保証される。
    """

    def __init__(self, table) -> None:
        self.table = table

    def save(self, blackout: Blackout) -> None:
        item = {
            "PK": f"TENANT#{blackout.tenant_id}",
            "SK": f"BLACKOUT#{blackout.date}",
            "entity_type": "BLACKOUT",
            "blackout_id": str(blackout.id),
            "tenant_id": str(blackout.tenant_id),
            "date": str(blackout.date),
        }
        if blackout.reason:
            item["reason"] = blackout.reason
        try:
            self.table.put_item(Item=item, ConditionExpression="attribute_not_exists(PK)")
        except ClientError as e:
            if is_conditional_check_failed(e):
                raise DuplicateResourceException(
                    f"Blackout already exists: {blackout.date}"
                ) from e
            raise

    def find_by_date(self, tenant_id: TenantId, date: EventDate) -> Blackout | None:
        response = self.table.get_item(
            Key={"PK": f"TENANT#{tenant_id}", "SK": f"BLACKOUT#{date}"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        return self._to_entity(item) if item else None

    def delete(self, tenant_id: TenantId, date: EventDate) -> None:
        try:
            self.table.delete_item(
                Key={"PK": f"TENANT#{tenant_id}", "SK": f"BLACKOUT#{date}"},
                ConditionExpression="attribute_exists(PK)",
            )
        except ClientError as e:
            if is_conditional_check_failed(e):
                raise ResourceNotFoundException(f"Blackout not found: {date}") from e
            raise

    def list_for_tenant(self, tenant_id: TenantId) -> list[Blackout]:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(f"TENANT#{tenant_id}")
            & Key("SK").begins_with("BLACKOUT#"),
        )
        return [self._to_entity(item) for item in items]

    def find_dates_in_range(self, tenant_id: TenantId, date_range: DateRange) -> set[date]:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(f"TENANT#{tenant_id}")
            & Key("SK").between(
                f"BLACKOUT#{date_range.start.isoformat()}",
                f"BLACKOUT#{date_range.end.isoformat()}",
            ),
            ProjectionExpression="#date",
            ExpressionAttributeNames={"#date": "date"},
            ConsistentRead=True,
        )
        return {date.fromisoformat(item["date"]) for item in items}

    def _to_entity(self, item: dict) -> Blackout:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Blackout(
            id=BlackoutId(value=item["blackout_id"]),
            tenant_id=TenantId(value=item["tenant_id"]),
            date=EventDate.from_string(item["date"]),
            reason=item.get("reason"),
        )
