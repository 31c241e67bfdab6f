"""
Expiry Sweeper - varredura periódica de entradas expiradas do store local
"""
from typing import Optional

from domain.constants import Cache
from application.ports.output.cache_store_port import ICacheStore
from application.services.periodic_task import PeriodicTask
from shared.config.logger_config import get_logger
from shared.utils.clock import Clock, SystemClock

logger = get_logger(child=True)


class ExpirySweeper:
    """
    Libera memória de entradas expiradas

    A corretude não depende dele: o store já esconde entradas expiradas na
    leitura. O lock do store é mantido apenas durante a varredura.
    """

    def __init__(
        self,
        store: ICacheStore,
        interval_seconds: float = Cache.SWEEP_INTERVAL,
        clock: Optional[Clock] = None
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self._task = PeriodicTask("cache_expiry_sweeper", interval_seconds, self.run_once)

    @property
    def interval_seconds(self) -> float:
        return self._task.interval_seconds

    @property
    def is_running(self) -> bool:
        return self._task.is_running

    def run_once(self) -> int:
        """
        Executa uma varredura

        Returns:
            Quantidade de entradas removidas
        """
        removed = self.store.sweep(self.clock.now())
        if removed:
            logger.info("Expired cache entries swept", removed=removed, remaining=len(self.store))
        return removed

    async def start(self) -> None:
        await self._task.start()

    async def stop(self) -> None:
        await self._task.stop()
