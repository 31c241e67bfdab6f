"""
TaggedResult Entity - Payload de clima acompanhado de metadados de cache
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from domain.constants import Cache
from shared.utils.datetime_parser import DateTimeParser


def strip_cache_metadata(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Remove campos de cache de um payload já marcado (evita re-tag)"""
    return {
        k: v for k, v in payload.items()
        if k not in (Cache.CACHED_FLAG_FIELD, Cache.CACHED_AT_FIELD)
    }


@dataclass(frozen=True)
class TaggedResult:
    """
    Resultado devolvido ao chamador

    cached_at é o momento da inserção original da entrada (epoch, segundos),
    nunca o momento da leitura.
    """
    payload: Dict[str, Any]
    cached: bool
    cached_at: Optional[float] = None

    @classmethod
    def from_cache(cls, payload: Dict[str, Any], inserted_at: float) -> 'TaggedResult':
        return cls(payload=strip_cache_metadata(payload), cached=True, cached_at=inserted_at)

    @classmethod
    def fresh(cls, payload: Dict[str, Any]) -> 'TaggedResult':
        return cls(payload=strip_cache_metadata(payload), cached=False)

    def to_api_response(self) -> dict:
        """Converte para formato de resposta da API"""
        response = dict(self.payload)
        response[Cache.CACHED_FLAG_FIELD] = self.cached
        if self.cached_at is not None:
            response[Cache.CACHED_AT_FIELD] = DateTimeParser.to_iso(self.cached_at)
        return response
