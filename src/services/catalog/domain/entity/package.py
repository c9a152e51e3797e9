from services.catalog.domain.value_object import PackageId, PackageSlug
from services.shared.domain import Entity, Money, TenantId
from services.shared.domain.exception import BusinessRuleViolationException


class Package(Entity[PackageId]):
    """パッケージエンティティ（テナントが販売するプラン）"""

    def __init__(
        self,
        id: PackageId,
        tenant_id: TenantId,
        slug: PackageSlug,
        title: str,
        price: Money,
        description: str = "",
        active: bool = True,
        segment_id: str | None = None,
    ) -> None:
        super().__init__(id)
        _require_title(title)
        self._tenant_id = tenant_id
        self._slug = slug
        self._title = title
        self._description = description
        self._price = price
        self._active = active
        self._segment_id = segment_id

    @property
    def tenant_id(self) -> TenantId:
        return self._tenant_id

    @property
    def slug(self) -> PackageSlug:
        return self._slug

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def price(self) -> Money:
        return self._price

    @property
    def active(self) -> bool:
        return self._active

    @property
    def segment_id(self) -> str | None:
        return self._segment_id

    def revise(
        self,
        slug: PackageSlug | None = None,
        title: str | None = None,
        description: str | None = None,
        price: Money | None = None,
        active: bool | None = None,
        segment_id: str | None = None,
        clear_segment: bool = False,
    ) -> None:
        """指定された項目だけを更新する"""
        if title is not None:
            _require_title(title)
            self._title = title
        if price is not None:
            if price.currency != self._price.currency:
                raise BusinessRuleViolationException(
                    f"Package price currency cannot change: {self._price.currency}"
                )
            self._price = price
        if slug is not None:
            self._slug = slug
        if description is not None:
            self._description = description
        if active is not None:
            self._active = active
        if clear_segment:
            self._segment_id = None
        elif segment_id is not None:
            self._segment_id = segment_id


def _require_title(title: str) -> None:
    if not title or not title.strip():
        raise BusinessRuleViolationException("Title cannot be empty")
    if len(title) > 200:
        raise BusinessRuleViolationException("Title is too long (max 200 characters)")
