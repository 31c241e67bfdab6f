"""Domain Value Objects"""
from .cache_key import CacheKey
from .reachability import ReachabilityState

__all__ = ['CacheKey', 'ReachabilityState']
