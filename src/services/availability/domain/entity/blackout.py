from services.availability.domain.value_object import BlackoutId
from services.shared.domain import Entity, EventDate, TenantId


class Blackout(Entity[BlackoutId]):
    """ブラックアウト（テナントが受付を停止した日）"""

    def __init__(
        self,
        id: BlackoutId,
        tenant_id: TenantId,
        date: EventDate,
        reason: str | None = None,
    ) -> None:
        super().__init__(id)
        if reason is not None and len(reason) > 500:
            raise ValueError("Blackout reason is too long (max 500 characters)")
        self._tenant_id = tenant_id
        self._date = date
        self._reason = reason

    @property
    def tenant_id(self) -> TenantId:
        return self._tenant_id

    @property
    def date(self) -> EventDate:
        return self._date

    @property
    def reason(self) -> str | None:
        return self._reason
