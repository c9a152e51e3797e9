import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from aws_lambda_powertools import Logger
from cachetools import TTLCache

from services.shared.domain import TenantId

logger = Logger(child=True)


def tenant_cache_key(tenant_id: TenantId, resource: str) -> str:
    """テナントIDを埋め込んだキャッシュキーを生成する

    不正なテナントIDは共有キーにフォールバックせず、例外にする。
    """
    if not isinstance(tenant_id, TenantId):
        raise ValueError(f"Cache key requires a TenantId, got {tenant_id!r}")
    if not resource or ":" in resource:
        raise ValueError(f"Invalid cache resource name: {resource!r}")
    return f"{resource}:{tenant_id}"


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class TtlCache:
    """プロセス内の TTL 付きキー・バリューキャッシュ

    cachetools.TTLCache はスレッドセーフではないため、ロックで保護する。
    値は共有されるので、不変オブジェクトだけを格納すること。
    """

    def __init__(
        self,
        ttl_seconds: int = 900,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl_seconds, timer=timer)
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def get(self, key: str) -> Any | None:
        with self._lock:
            value = self._cache.get(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
        logger.debug("Cache lookup", extra={"key": key, "hit": value is not None})
        return value

    def set(self, key: str, value: Any) -> None:
        if value is None:
            raise ValueError("None cannot be cached")
        with self._lock:
            self._cache[key] = value

    def delete(self, key: str) -> bool:
        with self._lock:
            existed = self._cache.pop(key, None) is not None
        logger.debug("Cache delete", extra={"key": key, "existed": existed})
        return existed

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            self._cache.expire()
            return CacheStats(
                hits=self._hits, misses=self._misses, size=len(self._cache)
            )
