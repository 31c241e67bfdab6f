"""
Health-check do cache remoto
Estratégias: tentativa única (padrão), re-probe periódico e desabilitado
"""
from typing import Optional

from ddtrace import tracer

from application.ports.output.cache_health_port import ICacheHealthCheck
from application.ports.output.remote_cache_port import IRemoteCacheClient
from application.services.periodic_task import PeriodicTask
from domain.constants import Cache
from domain.exceptions import RemoteCacheUnavailableException
from domain.value_objects.reachability import ReachabilityState
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class SingleShotHealthCheck(ICacheHealthCheck):
    """
    Uma única tentativa de conexão na inicialização

    UNPROBED -> {REACHABLE, UNREACHABLE}. Falhas posteriores de I/O não
    alteram a flag: cada operação falha e cai no store local.
    """

    def __init__(self, client: IRemoteCacheClient, connect_timeout: float = Cache.CONNECT_TIMEOUT):
        self.client = client
        self.connect_timeout = connect_timeout
        self._state = ReachabilityState.UNPROBED

    @property
    def state(self) -> ReachabilityState:
        return self._state

    def is_reachable(self) -> bool:
        return self._state is ReachabilityState.REACHABLE

    @tracer.wrap(resource="cache_health.probe")
    async def probe(self) -> bool:
        previous = self._state
        try:
            await self.client.connect(timeout=self.connect_timeout)
        except RemoteCacheUnavailableException as e:
            self._state = ReachabilityState.UNREACHABLE
            if previous is not ReachabilityState.UNREACHABLE:
                logger.warning(
                    "Remote cache unavailable, using in-memory cache fallback",
                    url=self.client.url,
                    error=str(e)
                )
            return False

        self._state = ReachabilityState.REACHABLE
        if previous is not ReachabilityState.REACHABLE:
            logger.info("Remote cache connection established", url=self.client.url)
        return True

    def report_failure(self, error: Exception) -> None:
        pass

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass


class PeriodicHealthCheck(SingleShotHealthCheck):
    """
    Re-probe periódico do cache remoto

    Falha de I/O rebaixa a flag para UNREACHABLE; o próximo probe bem-sucedido
    promove de volta para REACHABLE.
    """

    def __init__(
        self,
        client: IRemoteCacheClient,
        connect_timeout: float = Cache.CONNECT_TIMEOUT,
        interval_seconds: float = 30.0
    ):
        super().__init__(client, connect_timeout)
        self._task = PeriodicTask("cache_reachability_probe", interval_seconds, self.probe)

    @property
    def is_running(self) -> bool:
        return self._task.is_running

    def report_failure(self, error: Exception) -> None:
        if self._state is ReachabilityState.REACHABLE:
            logger.warning(
                "Remote cache marked unreachable until next probe",
                url=self.client.url,
                error=str(error)
            )
            self._state = ReachabilityState.UNREACHABLE

    async def start(self) -> None:
        await self._task.start()

    async def stop(self) -> None:
        await self._task.stop()


class DisabledHealthCheck(ICacheHealthCheck):
    """Deployment somente em memória: o tier remoto nunca é usado"""

    @property
    def state(self) -> ReachabilityState:
        return ReachabilityState.UNREACHABLE

    def is_reachable(self) -> bool:
        return False

    async def probe(self) -> bool:
        return False

    def report_failure(self, error: Exception) -> None:
        pass

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass


def create_health_check(
    client: Optional[IRemoteCacheClient],
    connect_timeout: float = Cache.CONNECT_TIMEOUT,
    reprobe_interval_seconds: float = Cache.REPROBE_INTERVAL
) -> ICacheHealthCheck:
    """
    Seleciona a estratégia de health-check

    Args:
        client: Cliente remoto (None = somente memória)
        connect_timeout: Timeout da tentativa de conexão
        reprobe_interval_seconds: <= 0 para tentativa única
    """
    if client is None:
        return DisabledHealthCheck()

    if reprobe_interval_seconds > 0:
        return PeriodicHealthCheck(client, connect_timeout, reprobe_interval_seconds)

    return SingleShotHealthCheck(client, connect_timeout)
