"""
Event loop persistente em thread dedicada
Compartilhado entre requisições (Flask threaded / Lambda) e tarefas de background
"""
import asyncio
import threading
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Coroutine, Optional

from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class EventLoopRunner:
    """
    Executa coroutines em um event loop de longa duração

    Benefícios:
    - Clientes aiohttp/redis permanecem válidos entre requisições
    - Sweeper e re-probe rodam no mesmo loop, sem bloquear as threads HTTP
    - run() com timeout cancela a coroutine no loop (cancelamento real)
    """

    def __init__(self, name: str = "weather-event-loop"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        return self._loop

    @property
    def is_running(self) -> bool:
        return self._loop is not None and self._loop.is_running()

    def start(self) -> None:
        """Cria o loop e a thread (idempotente)"""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return

            self._loop = asyncio.new_event_loop()
            started = threading.Event()

            def _run():
                asyncio.set_event_loop(self._loop)
                self._loop.call_soon(started.set)
                self._loop.run_forever()

            self._thread = threading.Thread(target=_run, name=self.name, daemon=True)
            self._thread.start()
            started.wait()
            logger.info("Event loop thread started", thread=self.name)

    def run(self, coro: Coroutine[Any, Any, Any], timeout: Optional[float] = None) -> Any:
        """
        Executa coroutine no loop e aguarda o resultado

        Raises:
            TimeoutError: Se exceder timeout (a coroutine é cancelada)
        """
        if not self.is_running:
            self.start()

        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            future.cancel()
            raise TimeoutError(f"Operation exceeded {timeout}s")

    def stop(self, timeout: float = 5.0) -> None:
        """Cancela tasks pendentes (ex.: buscas órfãs após timeout), para o loop e aguarda a thread"""
        with self._lock:
            if self._loop is None:
                return

            loop, thread = self._loop, self._thread
            if loop.is_running():
                pending = asyncio.run_coroutine_threadsafe(_cancel_pending_tasks(), loop)
                try:
                    pending.result(timeout=timeout)
                except FutureTimeoutError:
                    logger.warning("Pending tasks did not finish before loop shutdown", thread=self.name)
                loop.call_soon_threadsafe(loop.stop)
            if thread is not None:
                thread.join(timeout=timeout)
            if not loop.is_running():
                loop.close()

            self._loop = None
            self._thread = None
            logger.info("Event loop thread stopped", thread=self.name)


async def _cancel_pending_tasks() -> None:
    current = asyncio.current_task()
    tasks = [task for task in asyncio.all_tasks() if task is not current]
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
