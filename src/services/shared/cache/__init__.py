from .ttl_cache import CacheStats as CacheStats
from .ttl_cache import TtlCache as TtlCache
from .ttl_cache import tenant_cache_key as tenant_cache_key
