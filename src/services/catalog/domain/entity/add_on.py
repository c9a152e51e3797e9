from services.catalog.domain.value_object import AddOnId, PackageId
from services.shared.domain import Entity, Money, TenantId
from services.shared.domain.exception import BusinessRuleViolationException


class AddOn(Entity[AddOnId]):
    """アドオンエンティティ

    package_id が None のアドオンは、テナントの全パッケージに適用できる。
    """

    def __init__(
        self,
        id: AddOnId,
        tenant_id: TenantId,
        title: str,
        price: Money,
        package_id: PackageId | None = None,
        active: bool = True,
    ) -> None:
        super().__init__(id)
        if not title or not title.strip():
            raise BusinessRuleViolationException("Title cannot be empty")
        self._tenant_id = tenant_id
        self._title = title
        self._price = price
        self._package_id = package_id
        self._active = active

    @property
    def tenant_id(self) -> TenantId:
        return self._tenant_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def price(self) -> Money:
        return self._price

    @property
    def package_id(self) -> PackageId | None:
        return self._package_id

    @property
    def active(self) -> bool:
        return self._active

    @property
    def is_global(self) -> bool:
        return self._package_id is None

    def applies_to(self, package_id: PackageId) -> bool:
        return self._package_id is None or self._package_id == package_id

    def revise(
        self,
        title: str | None = None,
        price: Money | None = None,
        active: bool | None = None,
    ) -> None:
        if title is not None:
            if not title.strip():
                raise BusinessRuleViolationException("Title cannot be empty")
            self._title = title
        if price is not None:
            if price.currency != self._price.currency:
                raise BusinessRuleViolationException(
                    f"Add-on price currency cannot change: {self._price.currency}"
                )
            self._price = price
        if active is not None:
            self._active = active
