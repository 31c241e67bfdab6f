"""
Value Object para chaves de cache
"""
from dataclasses import dataclass

from domain.constants import Cache


@dataclass(frozen=True)
class CacheKey:
    """
    Chave de cache normalizada

    Convenção: "weather:" + consulta em minúsculas. O CacheService trata a
    chave como string opaca; a normalização é responsabilidade de quem chama.
    """
    value: str

    @classmethod
    def for_weather(cls, query: str) -> 'CacheKey':
        return cls(f"{Cache.PREFIX_WEATHER}{query.strip().lower()}")

    def __str__(self) -> str:
        return self.value
