from typing import TypedDict

from aws_lambda_powertools import Logger

from services.catalog.applications.catalog_service import CatalogService
from services.catalog.domain.entity import AddOn, Package
from services.catalog.domain.factory import AddOnDetails, CatalogFactory, PackageDetails
from services.catalog.domain.repository import CatalogRepository
from services.catalog.domain.value_object import AddOnId, PackageId, PackageSlug
from services.shared.domain import Money, TenantId
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)

logger = Logger(child=True)


class PackageChanges(TypedDict, total=False):
    """パッケージの部分更新（指定されたキーだけを更新する）"""

    slug: str
    title: str
    description: str
    price: int
    active: bool
    segment_id: str | None


class AddOnChanges(TypedDict, total=False):
    """アドオンの部分更新"""

    title: str
    price: int
    active: bool


class CatalogAdminService:
    """カタログ管理ユースケース（パッケージ・アドオンの CRUD）

    すべての書き込みはストア側でカタログバージョンを進め、
    成功を返す前にテナントのキャッシュを無効化する。
    """

    def __init__(
        self,
        repository: CatalogRepository,
        factory: CatalogFactory,
        catalog: CatalogService,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._catalog = catalog

    def list_all(self, tenant_id: TenantId) -> tuple[list[Package], list[AddOn]]:
        """無効なものも含めた全パッケージ・全アドオン"""
        _, packages, add_ons = self._repository.load_catalog(tenant_id)
        return packages, add_ons

    def create_package(self, tenant_id: TenantId, details: PackageDetails) -> Package:
        package = self._factory.create_package(tenant_id, details)
        self._repository.add_package(package)
        self._catalog.invalidate(tenant_id)
        logger.info(
            "Package created",
            extra={"tenant_id": str(tenant_id), "package_id": str(package.id)},
        )
        return package

    def update_package(
        self, tenant_id: TenantId, package_id: PackageId, changes: PackageChanges
    ) -> Package:
        package = self._get_package(tenant_id, package_id)
        previous_slug = package.slug
        price = changes.get("price")
        package.revise(
            slug=PackageSlug(changes["slug"]) if "slug" in changes else None,
            title=changes.get("title"),
            description=changes.get("description"),
            price=(
                Money(amount=price, currency=package.price.currency)
                if price is not None
                else None
            ),
            active=changes.get("active"),
            segment_id=changes.get("segment_id"),
            clear_segment="segment_id" in changes and changes["segment_id"] is None,
        )
        self._repository.update_package(package, previous_slug)
        self._catalog.invalidate(tenant_id)
        logger.info(
            "Package updated",
            extra={"tenant_id": str(tenant_id), "package_id": str(package_id)},
        )
        return package

    def delete_package(self, tenant_id: TenantId, package_id: PackageId) -> None:
        """パッケージと専用アドオンを削除する"""
        package = self._get_package(tenant_id, package_id)
        _, _, add_ons = self._repository.load_catalog(tenant_id)
        dedicated = [a for a in add_ons if a.package_id == package_id]
        self._repository.remove_package(package, dedicated)
        self._catalog.invalidate(tenant_id)
        logger.info(
            "Package deleted",
            extra={
                "tenant_id": str(tenant_id),
                "package_id": str(package_id),
                "removed_add_ons": len(dedicated),
            },
        )

    def create_add_on(self, tenant_id: TenantId, details: AddOnDetails) -> AddOn:
        add_on = self._factory.create_add_on(tenant_id, details)
        if add_on.package_id is not None:
            if self._repository.find_package(tenant_id, add_on.package_id) is None:
                raise BusinessRuleViolationException(
                    f"Add-on refers to an unknown package: {add_on.package_id}"
                )
        self._repository.add_add_on(add_on)
        self._catalog.invalidate(tenant_id)
        logger.info(
            "Add-on created",
            extra={"tenant_id": str(tenant_id), "add_on_id": str(add_on.id)},
        )
        return add_on

    def update_add_on(
        self, tenant_id: TenantId, add_on_id: AddOnId, changes: AddOnChanges
    ) -> AddOn:
        add_on = self._get_add_on(tenant_id, add_on_id)
        price = changes.get("price")
        add_on.revise(
            title=changes.get("title"),
            price=(
                Money(amount=price, currency=add_on.price.currency)
                if price is not None
                else None
            ),
            active=changes.get("active"),
        )
        self._repository.update_add_on(add_on)
        self._catalog.invalidate(tenant_id)
        return add_on

    def delete_add_on(self, tenant_id: TenantId, add_on_id: AddOnId) -> None:
        add_on = self._get_add_on(tenant_id, add_on_id)
        self._repository.remove_add_on(add_on)
        self._catalog.invalidate(tenant_id)

    def _get_package(self, tenant_id: TenantId, package_id: PackageId) -> Package:
        package = self._repository.find_package(tenant_id, package_id)
        if package is None:
            raise ResourceNotFoundException(f"Package not found: {package_id}")
        return package

    def _get_add_on(self, tenant_id: TenantId, add_on_id: AddOnId) -> AddOn:
        add_on = self._repository.find_add_on(tenant_id, add_on_id)
        if add_on is None:
            raise ResourceNotFoundException(f"Add-on not found: {add_on_id}")
        return add_on
