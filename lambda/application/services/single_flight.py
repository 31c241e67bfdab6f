"""
Single-flight: no máximo uma busca upstream em andamento por chave
"""
import asyncio
from typing import Any, Awaitable, Callable, Dict

from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class SingleFlight:
    """
    Registro de buscas em andamento por chave

    Chamadas concorrentes para a mesma chave aguardam o mesmo resultado
    (ou a mesma exceção). A busca roda em task própria: cancelar um chamador
    não cancela a busca dos demais. A entrada sai do registro assim que a
    busca termina.
    """

    def __init__(self):
        self._in_flight: Dict[str, asyncio.Future] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._in_flight

    async def do(self, key: str, factory: Callable[[], Awaitable[Any]]) -> Any:
        """
        Executa factory() uma única vez por chave entre chamadas concorrentes

        Args:
            key: Chave de deduplicação
            factory: Função que cria a coroutine da busca
        """
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        else:
            logger.debug("Joining in-flight fetch", key=key)

        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Future) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Marca a exceção como consumida quando todos os chamadores já desistiram
        if not task.cancelled():
            task.exception()
