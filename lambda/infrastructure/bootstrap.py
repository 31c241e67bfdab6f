"""
Composition root - construção explícita das dependências da aplicação
Criado pela rotina de inicialização do servidor e repassado aos handlers
"""
from dataclasses import dataclass
from typing import Optional

from application.ports.output.cache_health_port import ICacheHealthCheck
from application.ports.output.remote_cache_port import IRemoteCacheClient
from application.ports.output.weather_provider_port import IWeatherProvider
from application.services.cache_health import create_health_check
from application.services.cache_service import CacheService
from application.services.expiry_sweeper import ExpirySweeper
from application.services.single_flight import SingleFlight
from application.use_cases.get_weather_use_case import GetWeatherUseCase
from application.use_cases.search_cities_use_case import SearchCitiesUseCase
from infrastructure.adapters.cache.memory_cache_store import InMemoryCacheStore
from infrastructure.adapters.cache.redis_cache_client import RedisCacheClient
from infrastructure.adapters.input.event_loop_runner import EventLoopRunner
from infrastructure.adapters.output.http.aiohttp_session_manager import AiohttpSessionManager
from infrastructure.adapters.output.providers.weather_provider_factory import WeatherProviderFactory
from shared.config.logger_config import get_logger
from shared.config.settings import Settings, load_settings
from shared.utils.clock import Clock, SystemClock

logger = get_logger(child=True)


@dataclass
class AppContainer:
    """Dependências do processo (uma instância por servidor)"""
    settings: Settings
    runner: EventLoopRunner
    clock: Clock
    store: InMemoryCacheStore
    remote_client: Optional[IRemoteCacheClient]
    health_check: ICacheHealthCheck
    cache_service: CacheService
    sweeper: ExpirySweeper
    session_manager: AiohttpSessionManager
    weather_provider: IWeatherProvider
    single_flight: SingleFlight
    get_weather: GetWeatherUseCase
    search_cities: SearchCitiesUseCase
    started: bool = False


def build_container(
    settings: Optional[Settings] = None,
    *,
    remote_client: Optional[IRemoteCacheClient] = None,
    weather_provider: Optional[IWeatherProvider] = None,
    clock: Optional[Clock] = None,
    runner: Optional[EventLoopRunner] = None
) -> AppContainer:
    """
    Monta o container sem abrir conexões

    Args:
        settings: Configuração (padrão: load_settings())
        remote_client: Cliente remoto (padrão: Redis, se CACHE_BACKEND=tiered)
        weather_provider: Provider (padrão: WeatherProviderFactory)
        clock: Relógio (padrão: SystemClock)
        runner: Event loop (padrão: novo EventLoopRunner)
    """
    settings = settings or load_settings()
    clock = clock or SystemClock()

    if remote_client is None and settings.remote_cache_enabled:
        remote_client = RedisCacheClient(
            url=settings.redis_url,
            operation_timeout=settings.redis_operation_timeout,
            connect_timeout=settings.redis_connect_timeout
        )
    elif not settings.remote_cache_enabled:
        remote_client = None

    store = InMemoryCacheStore(clock=clock)
    health_check = create_health_check(
        remote_client,
        connect_timeout=settings.redis_connect_timeout,
        reprobe_interval_seconds=settings.reprobe_interval_seconds
    )
    cache_service = CacheService(
        store=store,
        remote_client=remote_client,
        health_check=health_check,
        clock=clock,
        default_ttl=settings.cache_ttl_seconds
    )
    sweeper = ExpirySweeper(store, interval_seconds=settings.sweep_interval_seconds, clock=clock)

    session_manager = AiohttpSessionManager()
    if weather_provider is None:
        weather_provider = WeatherProviderFactory(settings, session_manager).get_weather_provider()

    single_flight = SingleFlight()

    return AppContainer(
        settings=settings,
        runner=runner or EventLoopRunner(),
        clock=clock,
        store=store,
        remote_client=remote_client,
        health_check=health_check,
        cache_service=cache_service,
        sweeper=sweeper,
        session_manager=session_manager,
        weather_provider=weather_provider,
        single_flight=single_flight,
        get_weather=GetWeatherUseCase(
            cache_service=cache_service,
            weather_provider=weather_provider,
            single_flight=single_flight,
            ttl_seconds=settings.cache_ttl_seconds
        ),
        search_cities=SearchCitiesUseCase(weather_provider)
    )


async def start_services(container: AppContainer) -> None:
    """Probe do cache remoto + tarefas de background (no event loop corrente)"""
    await container.health_check.probe()
    await container.sweeper.start()
    await container.health_check.start()
    container.started = True

    logger.info(
        "Cache initialized",
        backend=container.settings.cache_backend,
        remote_state=container.health_check.state.value,
        ttl_seconds=container.settings.cache_ttl_seconds,
        sweep_interval_seconds=container.settings.sweep_interval_seconds
    )


async def stop_services(container: AppContainer) -> None:
    await container.health_check.stop()
    await container.sweeper.stop()
    if container.remote_client is not None:
        await container.remote_client.close()
    await container.session_manager.close()
    container.started = False


def start_container(container: AppContainer) -> AppContainer:
    """
    Rotina de inicialização do servidor (síncrona)

    A tentativa de conexão ao cache remoto é limitada pelo connect timeout;
    a inicialização nunca falha por causa do cache.
    """
    container.runner.start()
    guard = container.settings.redis_connect_timeout + 5.0
    try:
        container.runner.run(start_services(container), timeout=guard)
    except TimeoutError:
        logger.warning("Cache startup exceeded time limit, continuing with in-memory cache", timeout=guard)
    return container


def shutdown_container(container: AppContainer) -> None:
    if container.runner.is_running:
        try:
            container.runner.run(stop_services(container), timeout=5.0)
        except TimeoutError:
            logger.warning("Shutdown exceeded time limit")
    container.runner.stop()
