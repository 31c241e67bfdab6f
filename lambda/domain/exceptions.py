"""
Domain Exceptions - Business Rule Violations
Clean Architecture: Domain layer exceptions
"""
from typing import Optional


class DomainException(Exception):
    """Base exception for all domain-level errors"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidQueryException(DomainException):
    """Raised when the location query is missing or too short"""
    pass


class WeatherProviderException(DomainException):
    """Raised when the upstream weather provider fails"""
    def __init__(self, message: str, status_code: Optional[int] = None, details: dict = None):
        super().__init__(message, details)
        self.status_code = status_code


class CacheException(DomainException):
    """Base exception for cache-layer errors (never surfaced to the caller)"""
    pass


class RemoteCacheUnavailableException(CacheException):
    """Raised on connection, timeout or protocol errors talking to the remote cache"""
    pass


class CacheDeserializationException(CacheException):
    """Raised when a cached payload cannot be decoded"""
    pass
