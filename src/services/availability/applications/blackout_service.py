from aws_lambda_powertools import Logger

from services.availability.domain.entity import Blackout
from services.availability.domain.repository import BlackoutRepository
from services.availability.domain.value_object import BlackoutId
from services.shared.domain import EventDate, TenantId

logger = Logger(child=True)


class BlackoutService:
    """ブラックアウト管理ユースケース"""

    def __init__(self, repository: BlackoutRepository) -> None:
        self._repository = repository

    def add(
        self, tenant_id: TenantId, date: EventDate, reason: str | None = None
    ) -> Blackout:
        blackout = Blackout(
            id=BlackoutId.generate(), tenant_id=tenant_id, date=date, reason=reason
        )
        self._repository.save(blackout)
        logger.info(
            "Blackout added", extra={"tenant_id": str(tenant_id), "date": str(date)}
        )
        return blackout

    def remove(self, tenant_id: TenantId, date: EventDate) -> None:
        self._repository.delete(tenant_id, date)
        logger.info(
            "Blackout removed", extra={"tenant_id": str(tenant_id), "date": str(date)}
        )

    def list(self, tenant_id: TenantId) -> list[Blackout]:
        """日付順のブラックアウト一覧"""
        return sorted(
            self._repository.list_for_tenant(tenant_id), key=lambda b: b.date
        )
