from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutSession:
    """決済ゲートウェイが発行したホスト型チェックアウトセッション"""

    session_id: str
    checkout_url: str
