from __future__ import annotations

from dataclasses import dataclass

from services.catalog.domain.entity.add_on import AddOn
from services.catalog.domain.entity.package import Package
from services.catalog.domain.value_object.add_on_id import AddOnId
from services.catalog.domain.value_object.package_id import PackageId
from services.catalog.domain.value_object.package_slug import PackageSlug
from services.shared.domain import Money, TenantId


@dataclass(frozen=True)
class AddOnListing:
    """ストアフロント向けのアドオン（読み取り専用）"""

    add_on_id: AddOnId
    title: str
    price: Money
    package_id: PackageId | None


@dataclass(frozen=True)
class PackageListing:
    """ストアフロント向けのパッケージと適用可能なアドオン（読み取り専用）"""

    package_id: PackageId
    slug: PackageSlug
    title: str
    description: str
    price: Money
    segment_id: str | None
    add_ons: tuple[AddOnListing, ...]


@dataclass(frozen=True)
class CatalogSnapshot:
    """テナント1件分のカタログのスナップショット

    キャッシュに格納され、複数のリクエストで共有されるため不変。
    有効なパッケージと、その有効なアドオン（専用 + 全体）のみを保持する。
    version はスナップショットを読み込んだ時点のカタログバージョン。
    """

    tenant_id: TenantId
    version: int
    packages: tuple[PackageListing, ...]

    @classmethod
    def build(
        cls,
        tenant_id: TenantId,
        version: int,
        packages: list[Package],
        add_ons: list[AddOn],
    ) -> CatalogSnapshot:
        listings = []
        for package in sorted(packages, key=lambda p: (p.title, str(p.id))):
            if package.tenant_id != tenant_id or not package.active:
                continue
            applicable = tuple(
                AddOnListing(
                    add_on_id=add_on.id,
                    title=add_on.title,
                    price=add_on.price,
                    package_id=add_on.package_id,
                )
                for add_on in sorted(add_ons, key=lambda a: (a.title, str(a.id)))
                if add_on.tenant_id == tenant_id
                and add_on.active
                and add_on.applies_to(package.id)
            )
            listings.append(
                PackageListing(
                    package_id=package.id,
                    slug=package.slug,
                    title=package.title,
                    description=package.description,
                    price=package.price,
                    segment_id=package.segment_id,
                    add_ons=applicable,
                )
            )
        return cls(tenant_id=tenant_id, version=version, packages=tuple(listings))

    def list_packages(self, segment_id: str | None = None) -> list[PackageListing]:
        if segment_id is None:
            return list(self.packages)
        return [p for p in self.packages if p.segment_id == segment_id]

    def find_by_slug(self, slug: PackageSlug) -> PackageListing | None:
        for package in self.packages:
            if package.slug == slug:
                return package
        return None
