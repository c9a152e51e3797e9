from abc import ABC, abstractmethod
from datetime import datetime

from services.booking.domain.value_object import CheckoutSession
from services.shared.domain import Money, TenantId


class PaymentGateway(ABC):
    """決済ゲートウェイのインターフェース"""

    @abstractmethod
    def create_checkout_session(
        self,
        tenant_id: TenantId,
        amount: Money,
        description: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
        idempotency_key: str,
        customer_email: str,
        expires_at: datetime,
    ) -> CheckoutSession:
        """ホスト型チェックアウトセッションを作成する

        Raises:
            PaymentGatewayTimeoutException: 通信失敗・タイムアウト（結果不明）
            PaymentGatewayException: ゲートウェイがエラーを返した
        """
        raise NotImplementedError
