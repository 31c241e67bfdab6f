"""
Domain Constants - Todas as constantes da aplicação centralizadas
Valores ajustáveis por ambiente ficam em shared/config/settings.py
"""


class API:
    """Constantes de APIs externas"""

    # WeatherAPI.com
    WEATHERAPI_BASE_URL = "https://api.weatherapi.com/v1"
    WEATHERAPI_FORECAST_DAYS = 1

    # Timeouts e limites HTTP
    HTTP_TIMEOUT_TOTAL = 8  # segundos (permite retries dentro de 10s)
    HTTP_TIMEOUT_CONNECT = 3  # segundos
    HTTP_TIMEOUT_READ = 5  # segundos
    HTTP_CONNECTION_LIMIT = 100
    HTTP_CONNECTION_LIMIT_PER_HOST = 30
    DNS_CACHE_TTL = 300  # segundos

    # Retry (tenacity)
    RETRY_ATTEMPTS = 3
    RETRY_STATUS_CODES = (429, 503)


class Cache:
    """Constantes de cache"""

    # Redis
    DEFAULT_REDIS_URL = "redis://localhost:6379"
    CONNECT_TIMEOUT = 1.0  # segundos - tentativa única na inicialização
    OPERATION_TIMEOUT = 1.0  # segundos por comando

    # TTL e manutenção (segundos)
    DEFAULT_TTL = 300  # 5 minutos
    SWEEP_INTERVAL = 60  # varredura de entradas expiradas a cada minuto
    REPROBE_INTERVAL = 0  # 0 = sem nova tentativa após a inicialização

    # Prefixos de chave
    PREFIX_WEATHER = "weather:"

    # Campo gravado junto ao payload para medir staleness
    CACHED_AT_FIELD = "cachedAt"
    CACHED_FLAG_FIELD = "cached"

    # Modos de deployment
    BACKEND_TIERED = "tiered"
    BACKEND_MEMORY = "memory"


class Search:
    """Constantes da busca de cidades"""

    MIN_QUERY_LENGTH = 2
