from dataclasses import dataclass

from services.catalog.domain.value_object.catalog_snapshot import AddOnListing
from services.catalog.domain.value_object.package_id import PackageId
from services.shared.domain import Money, TenantId


@dataclass(frozen=True)
class CheckoutSelection:
    """チェックアウト時点の価格で読み込んだパッケージとアドオンの組み合わせ"""

    tenant_id: TenantId
    package_id: PackageId
    package_title: str
    package_price: Money
    add_ons: tuple[AddOnListing, ...]
