"""
Tarefa periódica em background (asyncio)
Base para a varredura de expiração e o re-probe do cache remoto
"""
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Union

from shared.config.logger_config import get_logger

logger = get_logger(child=True)

Action = Callable[[], Union[Any, Awaitable[Any]]]


class PeriodicTask:
    """
    Executa uma ação a cada intervalo fixo, independente das requisições

    Falha em uma execução é logada e não interrompe as seguintes.
    stop() interrompe a espera imediatamente, sem aguardar o intervalo.
    """

    def __init__(self, name: str, interval_seconds: float, action: Action):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self.name = name
        self.interval_seconds = interval_seconds
        self._action = action
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Agenda a tarefa no event loop em execução (idempotente)"""
        if self.is_running:
            return

        self._stop_event = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.info("Periodic task started", task=self.name, interval_seconds=self.interval_seconds)

    async def stop(self) -> None:
        if not self.is_running:
            return

        self._stop_event.set()
        await self._task
        self._task = None
        logger.info("Periodic task stopped", task=self.name)

    async def tick(self) -> Any:
        """Executa a ação uma vez; erros são logados"""
        try:
            result = self._action()
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            logger.error("Periodic task failed", task=self.name, error=str(e), exc_info=True)
            return None

    async def _run(self) -> None:
        while True:
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
                return
            except asyncio.TimeoutError:
                pass

            await self.tick()
