from datetime import date, datetime

from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus, CancellationReason
from services.booking.domain.exception import (
    DateAlreadyConfirmedException,
    WebhookAlreadyProcessedException,
)
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import (
    BookingId,
    Customer,
    WebhookLedgerEntry,
)
from services.booking.infrastructure.dynamodb_webhook_ledger import ledger_item
from services.catalog.domain.value_object import AddOnId, PackageId
from services.shared.domain import Currency, EventDate, Money, TenantId
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)
from services.shared.utils import to_int
from services.shared.utils.aws import (
    cancellation_codes,
    is_conditional_check_failed,
    query_all,
)

PENDING_INDEX = "GSI1"
PENDING_PARTITION = "PENDING_PAYMENT"
_CONDITION_FAILED = "ConditionalCheckFailed"


def _pk(tenant_id: TenantId) -> str:
    return f"TENANT#{tenant_id}"


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDB を使用した BookingRepository の具象実装

    - (テナント, 日付) の確定は CONFIRMED_DATE# アイテムの条件付き作成で一意にする
    - 支払い待ちの予約だけが GSI1（期限切れ検索用）に載る
    - セッションIDからの参照は SESSION# アイテム（強い整合性で読める）
    """

    def __init__(self, table) -> None:
        self.table = table
        self.client = table.meta.client

    def save(self, booking: Booking) -> None:
        try:
            self.table.put_item(
                Item=self._from_entity(booking),
                ConditionExpression="attribute_not_exists(PK)",
            )
        except ClientError as e:
            if is_conditional_check_failed(e):
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                ) from e
            raise

    def find_by_id(self, tenant_id: TenantId, booking_id: BookingId) -> Booking | None:
        response = self.table.get_item(
            Key={"PK": _pk(tenant_id), "SK": f"BOOKING#{booking_id}"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        return self._to_entity(item) if item else None

    def find_by_session(self, tenant_id: TenantId, session_id: str) -> Booking | None:
        response = self.table.get_item(
            Key={"PK": _pk(tenant_id), "SK": f"SESSION#{session_id}"},
            ConsistentRead=True,
        )
        pointer = response.get("Item")
        if pointer is None:
            return None
        return self.find_by_id(tenant_id, BookingId(value=pointer["booking_id"]))

    def attach_checkout_session(self, booking: Booking) -> None:
        items = [
            {
                "Update": {
                    "TableName": self.table.name,
                    "Key": self._key(booking),
                    "UpdateExpression": "SET checkout_session_id = :session, "
                    "updated_at = :updated_at",
                    "ConditionExpression": "attribute_exists(PK)",
                    "ExpressionAttributeValues": {
                        ":session": booking.checkout_session_id,
                        ":updated_at": booking.updated_at.isoformat(),
                    },
                }
            },
            {
                "Put": {
                    "TableName": self.table.name,
                    "Item": {
                        "PK": _pk(booking.tenant_id),
                        "SK": f"SESSION#{booking.checkout_session_id}",
                        "entity_type": "SESSION",
                        "booking_id": str(booking.id),
                    },
                }
            },
        ]
        self.client.transact_write_items(TransactItems=items)

    def confirm(self, booking: Booking, ledger_entry: WebhookLedgerEntry) -> None:
        items = [
            {
                "Put": {
                    "TableName": self.table.name,
                    "Item": {
                        "PK": _pk(booking.tenant_id),
                        "SK": f"CONFIRMED_DATE#{booking.event_date}",
                        "entity_type": "CONFIRMED_DATE",
                        "date": str(booking.event_date),
                        "booking_id": str(booking.id),
                        "confirmed_at": booking.updated_at.isoformat(),
                    },
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            },
            self._transition(booking),
            self._ledger_put(ledger_entry),
        ]
        try:
            self.client.transact_write_items(TransactItems=items)
        except ClientError as e:
            codes = cancellation_codes(e)
            if codes is None:
                raise
            date_code, booking_code, ledger_code = (codes + ["None"] * 3)[:3]
            if ledger_code == _CONDITION_FAILED:
                raise WebhookAlreadyProcessedException(
                    f"Webhook event already recorded: {ledger_entry.event_id}"
                ) from e
            if booking_code == _CONDITION_FAILED:
                raise OptimisticLockException(
                    f"Booking is no longer pending payment: {booking.id}"
                ) from e
            if date_code == _CONDITION_FAILED:
                raise DateAlreadyConfirmedException(
                    f"Date already confirmed: {booking.event_date}"
                ) from e
            raise

    def cancel(
        self, booking: Booking, ledger_entry: WebhookLedgerEntry | None = None
    ) -> None:
        items = [self._transition(booking)]
        if ledger_entry is not None:
            items.append(self._ledger_put(ledger_entry))
        try:
            self.client.transact_write_items(TransactItems=items)
        except ClientError as e:
            codes = cancellation_codes(e)
            if codes is None:
                raise
            if len(codes) > 1 and codes[1] == _CONDITION_FAILED:
                raise WebhookAlreadyProcessedException(
                    f"Webhook event already recorded: {ledger_entry.event_id}"
                ) from e
            if codes and codes[0] == _CONDITION_FAILED:
                raise OptimisticLockException(
                    f"Booking is no longer pending payment: {booking.id}"
                ) from e
            raise

    def find_confirmed_dates(
        self, tenant_id: TenantId, start: date, end: date
    ) -> set[date]:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(_pk(tenant_id))
            & Key("SK").between(
                f"CONFIRMED_DATE#{start.isoformat()}",
                f"CONFIRMED_DATE#{end.isoformat()}",
            ),
            ProjectionExpression="#date",
            ExpressionAttributeNames={"#date": "date"},
            ConsistentRead=True,
        )
        return {date.fromisoformat(item["date"]) for item in items}

    def list_for_tenant(self, tenant_id: TenantId) -> list[Booking]:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(_pk(tenant_id))
            & Key("SK").begins_with("BOOKING#"),
        )
        return [self._to_entity(item) for item in items]

    def find_pending_created_before(self, cutoff: datetime) -> list[Booking]:
        items = query_all(
            self.table,
            IndexName=PENDING_INDEX,
            KeyConditionExpression=Key("GSI1PK").eq(PENDING_PARTITION)
            & Key("GSI1SK").lt(cutoff.isoformat()),
        )
        return [self._to_entity(item) for item in items]

    def _key(self, booking: Booking) -> dict:
        return {"PK": _pk(booking.tenant_id), "SK": f"BOOKING#{booking.id}"}

    def _transition(self, booking: Booking) -> dict:
        """PENDING_PAYMENT を条件に、予約の現在のステータスを書き込む"""
        names = {"#status": "status"}
        values = {
            ":status": booking.status.value,
            ":pending": BookingStatus.PENDING_PAYMENT.value,
            ":updated_at": booking.updated_at.isoformat(),
        }
        expression = "SET #status = :status, updated_at = :updated_at"
        if booking.cancellation_reason is not None:
            expression += ", cancellation_reason = :reason"
            values[":reason"] = booking.cancellation_reason.value
        return {
            "Update": {
                "TableName": self.table.name,
                "Key": self._key(booking),
                "UpdateExpression": f"{expression} REMOVE GSI1PK, GSI1SK",
                "ConditionExpression": "#status = :pending",
                "ExpressionAttributeNames": names,
                "ExpressionAttributeValues": values,
            }
        }

    def _ledger_put(self, entry: WebhookLedgerEntry) -> dict:
        return {
            "Put": {
                "TableName": self.table.name,
                "Item": ledger_item(entry),
                "ConditionExpression": "attribute_not_exists(PK)",
            }
        }

    def _from_entity(self, booking: Booking) -> dict:
        item = {
            "PK": _pk(booking.tenant_id),
            "SK": f"BOOKING#{booking.id}",
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "tenant_id": str(booking.tenant_id),
            "package_id": str(booking.package_id),
            "package_title": booking.package_title,
            "event_date": str(booking.event_date),
            "customer_name": booking.customer.name,
            "email": booking.customer.email,
            "add_on_ids": [str(a) for a in booking.add_on_ids],
            "add_on_titles": list(booking.add_on_titles),
            "total": booking.total.amount,
            "currency": str(booking.total.currency),
            "status": booking.status.value,
            "created_at": booking.created_at.isoformat(),
            "updated_at": booking.updated_at.isoformat(),
        }
        if booking.checkout_session_id is not None:
            item["checkout_session_id"] = booking.checkout_session_id
        if booking.cancellation_reason is not None:
            item["cancellation_reason"] = booking.cancellation_reason.value
        if booking.is_pending:
            item["GSI1PK"] = PENDING_PARTITION
            item["GSI1SK"] = (
                f"{booking.created_at.isoformat()}#{booking.tenant_id}#{booking.id}"
            )
        return item

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        reason = item.get("cancellation_reason")
        return Booking(
            id=BookingId(value=item["booking_id"]),
            tenant_id=TenantId(value=item["tenant_id"]),
            package_id=PackageId(value=item["package_id"]),
            package_title=item["package_title"],
            event_date=EventDate.from_string(item["event_date"]),
            customer=Customer(name=item["customer_name"], email=item["email"]),
            add_on_ids=tuple(AddOnId(value=a) for a in item.get("add_on_ids", [])),
            add_on_titles=tuple(item.get("add_on_titles", [])),
            total=Money(
                amount=to_int(item["total"]), currency=Currency(item["currency"])
            ),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
            status=BookingStatus(item["status"]),
            checkout_session_id=item.get("checkout_session_id"),
            cancellation_reason=CancellationReason(reason) if reason else None,
        )
