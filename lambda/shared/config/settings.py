"""
Configurações centralizadas da aplicação
Todas as opções vêm de variáveis de ambiente com defaults documentados
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from domain.constants import API, Cache


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw.strip() == '':
        return float(default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == '':
        return int(default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Configuração imutável do processo"""

    # Cache
    redis_url: str = Cache.DEFAULT_REDIS_URL
    cache_backend: str = Cache.BACKEND_TIERED
    cache_ttl_seconds: int = Cache.DEFAULT_TTL
    sweep_interval_seconds: float = Cache.SWEEP_INTERVAL
    redis_connect_timeout: float = Cache.CONNECT_TIMEOUT
    redis_operation_timeout: float = Cache.OPERATION_TIMEOUT
    reprobe_interval_seconds: float = Cache.REPROBE_INTERVAL

    # Requisições
    request_timeout_seconds: float = 10.0

    # Provider de clima
    weather_provider: str = "weatherapi"
    weather_api_key: str = ""
    weather_api_base_url: str = API.WEATHERAPI_BASE_URL

    # Serviço / HTTP
    service_name: str = "weather-lookup"
    cors_origin: str = "*"

    @property
    def remote_cache_enabled(self) -> bool:
        return self.cache_backend != Cache.BACKEND_MEMORY

    @property
    def reprobe_enabled(self) -> bool:
        return self.reprobe_interval_seconds > 0


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Carrega Settings a partir do ambiente

    Args:
        environ: Mapeamento de variáveis (padrão: os.environ)

    Returns:
        Settings preenchido

    Raises:
        ValueError: Se algum valor numérico ou CACHE_BACKEND for inválido
    """
    env = os.environ if environ is None else environ

    cache_backend = env.get('CACHE_BACKEND', Cache.BACKEND_TIERED).strip().lower()
    if cache_backend not in (Cache.BACKEND_TIERED, Cache.BACKEND_MEMORY):
        raise ValueError(
            f"CACHE_BACKEND must be '{Cache.BACKEND_TIERED}' or '{Cache.BACKEND_MEMORY}', got {cache_backend!r}"
        )

    cache_ttl = _env_int(env, 'CACHE_TTL_SECONDS', Cache.DEFAULT_TTL)
    if cache_ttl <= 0:
        raise ValueError(f"CACHE_TTL_SECONDS must be positive, got {cache_ttl}")

    sweep_interval = _env_float(env, 'CACHE_SWEEP_INTERVAL_SECONDS', Cache.SWEEP_INTERVAL)
    if sweep_interval <= 0:
        raise ValueError(f"CACHE_SWEEP_INTERVAL_SECONDS must be positive, got {sweep_interval}")

    return Settings(
        redis_url=env.get('REDIS_URL', Cache.DEFAULT_REDIS_URL),
        cache_backend=cache_backend,
        cache_ttl_seconds=cache_ttl,
        sweep_interval_seconds=sweep_interval,
        redis_connect_timeout=_env_float(env, 'REDIS_CONNECT_TIMEOUT_SECONDS', Cache.CONNECT_TIMEOUT),
        redis_operation_timeout=_env_float(env, 'REDIS_OPERATION_TIMEOUT_SECONDS', Cache.OPERATION_TIMEOUT),
        reprobe_interval_seconds=_env_float(env, 'CACHE_REPROBE_INTERVAL_SECONDS', Cache.REPROBE_INTERVAL),
        request_timeout_seconds=_env_float(env, 'REQUEST_TIMEOUT_SECONDS', 10.0),
        weather_provider=env.get('WEATHER_PROVIDER', 'weatherapi').strip().lower(),
        weather_api_key=env.get('WEATHER_API_KEY', ''),
        weather_api_base_url=env.get('WEATHER_API_BASE_URL', API.WEATHERAPI_BASE_URL),
        service_name=env.get('DD_SERVICE', 'weather-lookup'),
        cors_origin=env.get('CORS_ORIGIN', '*'),
    )
