from abc import abstractmethod
from datetime import date, datetime

from services.booking.domain.entity import Booking
from services.booking.domain.value_object import BookingId, WebhookLedgerEntry
from services.shared.domain import Repository, TenantId


class BookingRepository(Repository[Booking, BookingId]):
    """予約リポジトリのインターフェース

    状態遷移はすべて「PENDING_PAYMENT であること」を条件にした
    アトミックな書き込みで行う。
    """

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """支払い待ちの新規予約を保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, tenant_id: TenantId, booking_id: BookingId) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_session(self, tenant_id: TenantId, session_id: str) -> Booking | None:
        """チェックアウトセッションIDで検索する（強い整合性）"""
        raise NotImplementedError

    @abstractmethod
    def attach_checkout_session(self, booking: Booking) -> None:
        """予約にセッションIDを記録し、セッションからの参照を作成する"""
        raise NotImplementedError

    @abstractmethod
    def confirm(self, booking: Booking, ledger_entry: WebhookLedgerEntry) -> None:
        """日付の確保・確定への遷移・台帳への記録を1トランザクションで行う

        Raises:
            WebhookAlreadyProcessedException: 台帳に同じイベントが既にある
            OptimisticLockException: 予約が PENDING_PAYMENT ではなくなっていた
            DateAlreadyConfirmedException: 同じ日付の確定予約が既にある
        """
        raise NotImplementedError

    @abstractmethod
    def cancel(
        self, booking: Booking, ledger_entry: WebhookLedgerEntry | None = None
    ) -> None:
        """キャンセルへの遷移（と台帳への記録）を1トランザクションで行う

        Raises:
            WebhookAlreadyProcessedException: 台帳に同じイベントが既にある
            OptimisticLockException: 予約が PENDING_PAYMENT ではなくなっていた
        """
        raise NotImplementedError

    @abstractmethod
    def find_confirmed_dates(
        self, tenant_id: TenantId, start: date, end: date
    ) -> set[date]:
        """範囲内（両端含む）で確定予約がある日付"""
        raise NotImplementedError

    @abstractmethod
    def list_for_tenant(self, tenant_id: TenantId) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_pending_created_before(self, cutoff: datetime) -> list[Booking]:
        """cutoff より前に作成された支払い待ちの予約（全テナント）"""
        raise NotImplementedError
