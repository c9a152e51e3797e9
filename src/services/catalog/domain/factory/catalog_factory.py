from typing import TypedDict

from services.catalog.domain.entity import AddOn, Package
from services.catalog.domain.value_object import AddOnId, PackageId, PackageSlug
from services.shared.domain import Currency, Money, TenantId


class PackageDetails(TypedDict):
    """パッケージの入力データ構造（TypedDict）"""

    slug: str
    title: str
    description: str
    price: int
    active: bool
    segment_id: str | None


class AddOnDetails(TypedDict):
    """アドオンの入力データ構造（TypedDict）"""

    title: str
    price: int
    package_id: str | None
    active: bool


class CatalogFactory:
    """パッケージ・アドオンのファクトリ"""

    def __init__(self, currency: Currency | None = None) -> None:
        self._currency = currency or Currency.usd()

    def create_package(self, tenant_id: TenantId, details: PackageDetails) -> Package:
        """新規パッケージエンティティを生成する"""
        return Package(
            id=PackageId.generate(),
            tenant_id=tenant_id,
            slug=PackageSlug(details["slug"]),
            title=details["title"],
            description=details["description"],
            price=Money(amount=details["price"], currency=self._currency),
            active=details["active"],
            segment_id=details["segment_id"],
        )

    def create_add_on(self, tenant_id: TenantId, details: AddOnDetails) -> AddOn:
        """新規アドオンエンティティを生成する"""
        package_id = details["package_id"]
        return AddOn(
            id=AddOnId.generate(),
            tenant_id=tenant_id,
            title=details["title"],
            price=Money(amount=details["price"], currency=self._currency),
            package_id=PackageId(package_id) if package_id else None,
            active=details["active"],
        )
