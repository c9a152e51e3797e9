from aws_lambda_powertools import Logger

from services.catalog.domain.repository import CatalogRepository
from services.catalog.domain.value_object import AddOnId, PackageId, PackageSlug
from services.catalog.domain.value_object.catalog_snapshot import (
    AddOnListing,
    CatalogSnapshot,
    PackageListing,
)
from services.catalog.domain.value_object.checkout_selection import CheckoutSelection
from services.shared.cache import TtlCache, tenant_cache_key
from services.shared.domain import TenantId
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)

logger = Logger(child=True)

CATALOG_CACHE_RESOURCE = "catalog"


class CatalogService:
    """テナント単位のカタログ読み取りサービス（リードスルーキャッシュ）

    キャッシュヒットでも、スナップショットのバージョンがストアの現在の
    カタログバージョンと一致しない場合は読み直す。他の Lambda インスタンスで
    行われた書き込みもこれで反映される。
    """

    def __init__(self, repository: CatalogRepository, cache: TtlCache) -> None:
        self._repository = repository
        self._cache = cache

    def get_packages(
        self, tenant_id: TenantId, segment_id: str | None = None
    ) -> list[PackageListing]:
        """有効なパッケージ一覧（適用可能なアドオン付き）"""
        return self._snapshot(tenant_id).list_packages(segment_id)

    def get_package(self, tenant_id: TenantId, slug: PackageSlug) -> PackageListing:
        package = self._snapshot(tenant_id).find_by_slug(slug)
        if package is None:
            raise ResourceNotFoundException(f"Package not found: {slug}")
        return package

    def invalidate(self, tenant_id: TenantId) -> None:
        """テナントのカタログキャッシュを破棄する"""
        self._cache.delete(tenant_cache_key(tenant_id, CATALOG_CACHE_RESOURCE))
        logger.info("Catalog cache invalidated", extra={"tenant_id": str(tenant_id)})

    def load_for_checkout(
        self,
        tenant_id: TenantId,
        package_id: PackageId,
        add_on_ids: list[AddOnId],
    ) -> CheckoutSelection:
        """チェックアウト用に現在の価格をストアから直接読み込む"""
        package = self._repository.find_package(tenant_id, package_id)
        if package is None or not package.active:
            raise BusinessRuleViolationException(
                f"Package is not available: {package_id}"
            )

        unique_ids = list(dict.fromkeys(add_on_ids))
        found = {
            add_on.id: add_on
            for add_on in self._repository.find_add_ons(tenant_id, unique_ids)
        }
        listings = []
        for add_on_id in unique_ids:
            add_on = found.get(add_on_id)
            if add_on is None or not add_on.active or not add_on.applies_to(package_id):
                raise BusinessRuleViolationException(
                    f"Add-on is not available for this package: {add_on_id}"
                )
            listings.append(
                AddOnListing(
                    add_on_id=add_on.id,
                    title=add_on.title,
                    price=add_on.price,
                    package_id=add_on.package_id,
                )
            )

        return CheckoutSelection(
            tenant_id=tenant_id,
            package_id=package.id,
            package_title=package.title,
            package_price=package.price,
            add_ons=tuple(listings),
        )

    def _snapshot(self, tenant_id: TenantId) -> CatalogSnapshot:
        key = tenant_cache_key(tenant_id, CATALOG_CACHE_RESOURCE)
        cached = self._cache.get(key)
        if cached is not None:
            current_version = self._repository.get_version(tenant_id)
            if cached.tenant_id == tenant_id and cached.version == current_version:
                return cached
            logger.info(
                "Catalog cache is stale",
                extra={
                    "tenant_id": str(tenant_id),
                    "cached_version": cached.version,
                    "current_version": current_version,
                },
            )

        version, packages, add_ons = self._repository.load_catalog(tenant_id)
        snapshot = CatalogSnapshot.build(tenant_id, version, packages, add_ons)
        self._cache.set(key, snapshot)
        logger.debug(
            "Catalog loaded from store",
            extra={"tenant_id": str(tenant_id), "version": version},
        )
        return snapshot
