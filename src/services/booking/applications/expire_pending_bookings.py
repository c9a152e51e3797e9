from datetime import datetime, timedelta

from aws_lambda_powertools import Logger

from services.booking.domain.enum import CancellationReason
from services.booking.domain.repository import BookingRepository
from services.shared.domain.exception import OptimisticLockException

logger = Logger(child=True)


class ExpirePendingBookingsService:
    """放置された支払い待ち予約を expired でキャンセルするユースケース

    TTL はチェックアウトセッションの有効期限より長く設定する。
    キャンセルは PENDING_PAYMENT を条件にした書き込みなので、
    並行する確定処理とは競合しない（確定が先ならスキップ）。
    """

    def __init__(self, repository: BookingRepository, ttl_minutes: int = 120) -> None:
        self._repository = repository
        self._ttl = timedelta(minutes=ttl_minutes)

    def expire(self, now: datetime) -> int:
        """期限切れの予約をキャンセルし、件数を返す"""
        cutoff = now - self._ttl
        expired = 0
        for booking in self._repository.find_pending_created_before(cutoff):
            if not booking.is_pending:
                continue
            booking.cancel(CancellationReason.EXPIRED, at=now)
            try:
                self._repository.cancel(booking)
            except OptimisticLockException:
                logger.info(
                    "Booking settled before expiry, skipped",
                    extra={
                        "tenant_id": str(booking.tenant_id),
                        "booking_id": str(booking.id),
                    },
                )
                continue
            expired += 1
            logger.info(
                "Pending booking expired",
                extra={
                    "tenant_id": str(booking.tenant_id),
                    "booking_id": str(booking.id),
                },
            )
        return expired
