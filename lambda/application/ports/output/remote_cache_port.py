"""
Output Port: Interface para clientes de cache remoto compartilhado
Usado para desacoplar o CacheService do backend (Redis, etc.)
"""
from typing import Protocol, Optional


class IRemoteCacheClient(Protocol):
    """
    Interface assíncrona para cache remoto

    Implementações devem levantar RemoteCacheUnavailableException em erros
    de conexão, timeout ou protocolo. Ausência de chave não é erro.
    """

    @property
    def url(self) -> str:
        """URL do backend (para logs)"""
        ...

    async def connect(self, timeout: float) -> None:
        """
        Abre conexão e valida com um ping

        Args:
            timeout: Limite em segundos para a tentativa
        """
        ...

    async def get(self, key: str) -> Optional[str]:
        """
        Busca valor serializado

        Returns:
            Texto JSON ou None se a chave não existe
        """
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Armazena valor serializado com expiração em segundos"""
        ...

    async def delete(self, key: str) -> None:
        """Remove chave (no-op se não existir)"""
        ...

    async def close(self) -> None:
        """Libera conexões"""
        ...
