"""
Output Port: Estratégia de health-check do cache remoto
Permite escolher tentativa única ou re-probe periódico sem mudar o CacheService
"""
from typing import Protocol

from domain.value_objects.reachability import ReachabilityState


class ICacheHealthCheck(Protocol):
    """Interface para a flag de alcançabilidade do cache remoto"""

    @property
    def state(self) -> ReachabilityState:
        ...

    def is_reachable(self) -> bool:
        """Leitura barata da flag (pode estar defasada por uma janela curta)"""
        ...

    async def probe(self) -> bool:
        """
        Tenta conectar no cache remoto e atualiza a flag

        Returns:
            True se o cache remoto respondeu
        """
        ...

    def report_failure(self, error: Exception) -> None:
        """Notifica falha de I/O observada pelo CacheService"""
        ...

    async def start(self) -> None:
        """Inicia re-probe em background (no-op na estratégia de tentativa única)"""
        ...

    async def stop(self) -> None:
        ...
