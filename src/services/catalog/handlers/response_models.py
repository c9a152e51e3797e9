from pydantic import BaseModel

from services.catalog.domain.entity import AddOn, Package
from services.catalog.domain.value_object.catalog_snapshot import (
    AddOnListing,
    PackageListing,
)


class AddOnData(BaseModel):
    """アドオンのレスポンスモデル"""

    add_on_id: str
    title: str
    price: int
    currency: str
    package_id: str | None = None


class PackageData(BaseModel):
    """パッケージのレスポンスモデル"""

    package_id: str
    slug: str
    title: str
    description: str
    price: int
    currency: str
    segment_id: str | None = None
    add_ons: list[AddOnData] = []


class AdminPackageData(BaseModel):
    """管理画面向けパッケージ（無効なものも含む）"""

    package_id: str
    slug: str
    title: str
    description: str
    price: int
    currency: str
    active: bool
    segment_id: str | None = None


class AdminAddOnData(AddOnData):
    active: bool


def add_on_listing_data(add_on: AddOnListing) -> AddOnData:
    return AddOnData(
        add_on_id=str(add_on.add_on_id),
        title=add_on.title,
        price=add_on.price.amount,
        currency=str(add_on.price.currency),
        package_id=str(add_on.package_id) if add_on.package_id else None,
    )


def package_listing_data(package: PackageListing) -> PackageData:
    return PackageData(
        package_id=str(package.package_id),
        slug=str(package.slug),
        title=package.title,
        description=package.description,
        price=package.price.amount,
        currency=str(package.price.currency),
        segment_id=package.segment_id,
        add_ons=[add_on_listing_data(a) for a in package.add_ons],
    )


def admin_package_data(package: Package) -> AdminPackageData:
    return AdminPackageData(
        package_id=str(package.id),
        slug=str(package.slug),
        title=package.title,
        description=package.description,
        price=package.price.amount,
        currency=str(package.price.currency),
        active=package.active,
        segment_id=package.segment_id,
    )


def admin_add_on_data(add_on: AddOn) -> AdminAddOnData:
    return AdminAddOnData(
        add_on_id=str(add_on.id),
        title=add_on.title,
        price=add_on.price.amount,
        currency=str(add_on.price.currency),
        package_id=str(add_on.package_id) if add_on.package_id else None,
        active=add_on.active,
    )
