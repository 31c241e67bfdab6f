"""
Output Port: Interface para o store local de entradas de cache
Operações síncronas, em memória, sem suspensão
"""
from typing import Protocol, Optional, Any

from domain.entities.cache_entry import CacheEntry


class ICacheStore(Protocol):
    """Interface para store local de cache com TTL"""

    def put(self, key: str, payload: Any, ttl_seconds: float, inserted_at: Optional[float] = None) -> CacheEntry:
        """
        Armazena payload com expires_at = inserted_at + ttl

        Args:
            key: Chave de cache
            payload: Payload opaco
            ttl_seconds: Tempo de vida em segundos
            inserted_at: Momento da inserção (padrão: agora)

        Returns:
            Entrada gravada (substitui qualquer entrada anterior)
        """
        ...

    def get(self, key: str) -> Optional[Any]:
        """
        Busca payload visível; entrada expirada é removida na leitura

        Returns:
            Payload ou None se ausente/expirado
        """
        ...

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """Igual a get, mas retorna a entrada completa (com inserted_at)"""
        ...

    def remove(self, key: str) -> bool:
        """
        Remove entrada incondicionalmente

        Returns:
            True se existia entrada para a chave
        """
        ...

    def sweep(self, now: Optional[float] = None) -> int:
        """
        Remove todas as entradas com expires_at <= now

        Returns:
            Quantidade de entradas removidas
        """
        ...

    def __len__(self) -> int:
        ...
