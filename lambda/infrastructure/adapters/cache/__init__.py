"""Cache adapters - store em memória e cliente Redis"""
from .memory_cache_store import InMemoryCacheStore
from .redis_cache_client import RedisCacheClient

__all__ = ['InMemoryCacheStore', 'RedisCacheClient']
