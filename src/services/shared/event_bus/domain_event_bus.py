from collections import defaultdict
from collections.abc import Callable
from typing import TypeVar

from aws_lambda_powertools import Logger

from services.shared.domain import DomainEvent

logger = Logger(child=True)

E = TypeVar("E", bound=DomainEvent)

EventHandler = Callable[[E], None]


class DomainEventBus:
    """プロセス内のドメインイベントバス

    - 同期・登録順に全ハンドラを呼び出す
    - ハンドラの例外は個別にログへ記録し、発行元には再送出しない
      （確定済みの予約トランザクションをハンドラの失敗で巻き戻さない）
    - Lambda のモジュールスコープで一度だけ組み立てる
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: EventHandler) -> None:
        """イベント型にハンドラを登録する"""
        self._handlers[event_type.event_name].append(handler)

    def publish(self, event: DomainEvent) -> int:
        """イベントを発行し、成功したハンドラ数を返す"""
        handlers = list(self._handlers.get(event.event_name, ()))
        delivered = 0
        for handler in handlers:
            try:
                handler(event)
                delivered += 1
            except Exception:
                logger.exception(
                    "Domain event handler failed",
                    extra={
                        "event_name": event.event_name,
                        "handler": getattr(handler, "__qualname__", repr(handler)),
                    },
                )
        return delivered

    def publish_all(self, events: list) -> None:
        for event in events:
            self.publish(event)

    def clear(self) -> None:
        self._handlers.clear()
