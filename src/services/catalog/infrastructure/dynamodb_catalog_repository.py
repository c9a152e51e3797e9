from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from services.catalog.domain.entity import AddOn, Package
from services.catalog.domain.repository import CatalogRepository
from services.catalog.domain.value_object import AddOnId, PackageId, PackageSlug
from services.shared.domain import Currency, Money, TenantId
from services.shared.domain.exception import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from services.shared.utils import to_int
from services.shared.utils.aws import cancellation_codes, query_all

_NOT_EXISTS = "attribute_not_exists(PK)"
_EXISTS = "attribute_exists(PK)"
_CONDITION_FAILED = "ConditionalCheckFailed"
_MAX_TRANSACTION_ITEMS = 100


def _pk(tenant_id: TenantId) -> str:
    return f"TENANT#{tenant_id}"


def _failed_positions(error: ClientError) -> set[int]:
    """条件チェックで失敗したトランザクション項目の位置

    競合（TransactionConflict）などは含まない。
    """
    codes = cancellation_codes(error) or []
    return {i for i, code in enumerate(codes) if code == _CONDITION_FAILED}


class DynamoDBCatalogRepository(CatalogRepository):
    """DynamoDB を使用した CatalogRepository の具象実装

    書き込みは TransactWriteItems で、アイテムの変更と
    CATALOG_VERSION のインクリメントを同時にコミットする。
    """

    def __init__(self, table) -> None:
        self.table = table
        self.client = table.meta.client

    def get_version(self, tenant_id: TenantId) -> int:
        response = self.table.get_item(
            Key={"PK": _pk(tenant_id), "SK": "CATALOG_VERSION"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        return to_int(item["version"]) if item else 0

    def load_catalog(
        self, tenant_id: TenantId
    ) -> tuple[int, list[Package], list[AddOn]]:
        version = self.get_version(tenant_id)
        package_items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(_pk(tenant_id))
            & Key("SK").begins_with("PACKAGE#"),
            ConsistentRead=True,
        )
        add_on_items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(_pk(tenant_id))
            & Key("SK").begins_with("ADDON#"),
            ConsistentRead=True,
        )
        return (
            version,
            [self._to_package(item) for item in package_items],
            [self._to_add_on(item) for item in add_on_items],
        )

    def find_package(self, tenant_id: TenantId, package_id: PackageId) -> Package | None:
        response = self.table.get_item(
            Key={"PK": _pk(tenant_id), "SK": f"PACKAGE#{package_id}"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        return self._to_package(item) if item else None

    def find_add_on(self, tenant_id: TenantId, add_on_id: AddOnId) -> AddOn | None:
        response = self.table.get_item(
            Key={"PK": _pk(tenant_id), "SK": f"ADDON#{add_on_id}"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        return self._to_add_on(item) if item else None

    def find_add_ons(
        self, tenant_id: TenantId, add_on_ids: list[AddOnId]
    ) -> list[AddOn]:
        add_ons = []
        for add_on_id in dict.fromkeys(add_on_ids):
            add_on = self.find_add_on(tenant_id, add_on_id)
            if add_on is not None:
                add_ons.append(add_on)
        return add_ons

    def add_package(self, package: Package) -> None:
        """パッケージとスラッグの確保を同時に書き込む"""
        items = [
            self._put(self._from_package(package), _NOT_EXISTS),
            self._put(self._slug_claim(package), _NOT_EXISTS),
            self._bump_version(package.tenant_id),
        ]
        try:
            self.client.transact_write_items(TransactItems=items)
        except ClientError as e:
            failed = _failed_positions(e)
            if failed & {0, 1}:
                raise DuplicateResourceException(
                    f"Package slug already exists: {package.slug}"
                ) from e
            raise

    def update_package(self, package: Package, previous_slug: PackageSlug) -> None:
        items = [self._put(self._from_package(package), _EXISTS)]
        slug_changed = package.slug != previous_slug
        if slug_changed:
            items.append(
                self._delete(package.tenant_id, f"PACKAGE_SLUG#{previous_slug}")
            )
            items.append(self._put(self._slug_claim(package), _NOT_EXISTS))
        items.append(self._bump_version(package.tenant_id))
        try:
            self.client.transact_write_items(TransactItems=items)
        except ClientError as e:
            failed = _failed_positions(e)
            if 0 in failed:
                raise ResourceNotFoundException(
                    f"Package not found: {package.id}"
                ) from e
            if slug_changed and 2 in failed:
                raise DuplicateResourceException(
                    f"Package slug already exists: {package.slug}"
                ) from e
            raise

    def remove_package(self, package: Package, add_ons: list[AddOn]) -> None:
        """パッケージと専用アドオンを削除する

        1トランザクションに収まらないアドオンは、パッケージの削除後に
        分割して削除する（それぞれバージョンも更新する）。
        """
        head = add_ons[: _MAX_TRANSACTION_ITEMS - 3]
        rest = add_ons[_MAX_TRANSACTION_ITEMS - 3 :]
        items = [
            self._delete(package.tenant_id, f"PACKAGE#{package.id}", _EXISTS),
            self._delete(package.tenant_id, f"PACKAGE_SLUG#{package.slug}"),
        ]
        items.extend(
            self._delete(add_on.tenant_id, f"ADDON#{add_on.id}") for add_on in head
        )
        items.append(self._bump_version(package.tenant_id))
        self._write_existing(items, f"Package not found: {package.id}")

        chunk_size = _MAX_TRANSACTION_ITEMS - 1
        for start in range(0, len(rest), chunk_size):
            chunk = [
                self._delete(add_on.tenant_id, f"ADDON#{add_on.id}")
                for add_on in rest[start : start + chunk_size]
            ]
            chunk.append(self._bump_version(package.tenant_id))
            self.client.transact_write_items(TransactItems=chunk)

    def add_add_on(self, add_on: AddOn) -> None:
        items = [
            self._put(self._from_add_on(add_on), _NOT_EXISTS),
            self._bump_version(add_on.tenant_id),
        ]
        try:
            self.client.transact_write_items(TransactItems=items)
        except ClientError as e:
            if 0 in _failed_positions(e):
                raise DuplicateResourceException(
                    f"Add-on already exists: {add_on.id}"
                ) from e
            raise

    def update_add_on(self, add_on: AddOn) -> None:
        items = [
            self._put(self._from_add_on(add_on), _EXISTS),
            self._bump_version(add_on.tenant_id),
        ]
        self._write_existing(items, f"Add-on not found: {add_on.id}")

    def remove_add_on(self, add_on: AddOn) -> None:
        items = [
            self._delete(add_on.tenant_id, f"ADDON#{add_on.id}", _EXISTS),
            self._bump_version(add_on.tenant_id),
        ]
        self._write_existing(items, f"Add-on not found: {add_on.id}")

    def _write_existing(self, items: list[dict], not_found_message: str) -> None:
        """先頭アイテムの存在を条件に書き込む"""
        try:
            self.client.transact_write_items(TransactItems=items)
        except ClientError as e:
            if 0 in _failed_positions(e):
                raise ResourceNotFoundException(not_found_message) from e
            raise

    def _put(self, item: dict, condition: str) -> dict:
        return {
            "Put": {
                "TableName": self.table.name,
                "Item": item,
                "ConditionExpression": condition,
            }
        }

    def _delete(
        self, tenant_id: TenantId, sk: str, condition: str | None = None
    ) -> dict:
        delete: dict = {
            "TableName": self.table.name,
            "Key": {"PK": _pk(tenant_id), "SK": sk},
        }
        if condition:
            delete["ConditionExpression"] = condition
        return {"Delete": delete}

    def _bump_version(self, tenant_id: TenantId) -> dict:
        return {
            "Update": {
                "TableName": self.table.name,
                "Key": {"PK": _pk(tenant_id), "SK": "CATALOG_VERSION"},
                "UpdateExpression": "ADD #version :one",
                "ExpressionAttributeNames": {"#version": "version"},
                "ExpressionAttributeValues": {":one": 1},
            }
        }

    def _slug_claim(self, package: Package) -> dict:
        return {
            "PK": _pk(package.tenant_id),
            "SK": f"PACKAGE_SLUG#{package.slug}",
            "entity_type": "PACKAGE_SLUG",
            "package_id": str(package.id),
        }

    def _from_package(self, package: Package) -> dict:
        item = {
            "PK": _pk(package.tenant_id),
            "SK": f"PACKAGE#{package.id}",
            "entity_type": "PACKAGE",
            "tenant_id": str(package.tenant_id),
            "package_id": str(package.id),
            "slug": str(package.slug),
            "title": package.title,
            "description": package.description,
            "price": package.price.amount,
            "currency": str(package.price.currency),
            "active": package.active,
        }
        if package.segment_id is not None:
            item["segment_id"] = package.segment_id
        return item

    def _from_add_on(self, add_on: AddOn) -> dict:
        item = {
            "PK": _pk(add_on.tenant_id),
            "SK": f"ADDON#{add_on.id}",
            "entity_type": "ADDON",
            "tenant_id": str(add_on.tenant_id),
            "add_on_id": str(add_on.id),
            "title": add_on.title,
            "price": add_on.price.amount,
            "currency": str(add_on.price.currency),
            "active": add_on.active,
        }
        if add_on.package_id is not None:
            item["package_id"] = str(add_on.package_id)
        return item

    def _to_package(self, item: dict) -> Package:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Package(
            id=PackageId(value=item["package_id"]),
            tenant_id=TenantId(value=item["tenant_id"]),
            slug=PackageSlug(value=item["slug"]),
            title=item["title"],
            description=item.get("description", ""),
            price=Money(
                amount=to_int(item["price"]), currency=Currency(item["currency"])
            ),
            active=bool(item.get("active", True)),
            segment_id=item.get("segment_id"),
        )

    def _to_add_on(self, item: dict) -> AddOn:
        package_id = item.get("package_id")
        return AddOn(
            id=AddOnId(value=item["add_on_id"]),
            tenant_id=TenantId(value=item["tenant_id"]),
            title=item["title"],
            price=Money(
                amount=to_int(item["price"]), currency=Currency(item["currency"])
            ),
            package_id=PackageId(value=package_id) if package_id else None,
            active=bool(item.get("active", True)),
        )
