"""
CacheEntry Entity - Entrada do cache local com TTL
"""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """
    Entrada imutável do cache

    Entradas nunca são alteradas: uma nova escrita substitui a entrada
    inteira. Timestamps em segundos (epoch).
    """
    key: str
    payload: Any
    inserted_at: float
    expires_at: float

    @classmethod
    def create(cls, key: str, payload: Any, ttl_seconds: float, inserted_at: float) -> 'CacheEntry':
        """Cria entrada com expires_at = inserted_at + ttl"""
        return cls(
            key=key,
            payload=payload,
            inserted_at=inserted_at,
            expires_at=inserted_at + ttl_seconds
        )

    def is_visible(self, now: float) -> bool:
        """Entrada visível para leitura somente enquanto now < expires_at"""
        return now < self.expires_at

    def is_expired(self, now: float) -> bool:
        return not self.is_visible(now)

    def remaining_ttl(self, now: float) -> float:
        return max(0.0, self.expires_at - now)
