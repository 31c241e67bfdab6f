"""
Output Ports - Interfaces para comunicação com infraestrutura externa
Define contratos que devem ser implementados pelos adapters de saída
"""

from .cache_store_port import ICacheStore
from .remote_cache_port import IRemoteCacheClient
from .cache_health_port import ICacheHealthCheck
from .weather_provider_port import IWeatherProvider

__all__ = ['ICacheStore', 'IRemoteCacheClient', 'ICacheHealthCheck', 'IWeatherProvider']
