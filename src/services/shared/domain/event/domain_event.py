from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class DomainEvent:
    """ドメインイベント基底クラス

    永続化されない一過性の通知。event_name をキーにバスへ配送される。
    """

    event_name: ClassVar[str] = "DomainEvent"
