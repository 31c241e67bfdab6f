"""
Use Case: Get Weather
Cache-aside: cache hit devolve o payload marcado; miss busca no provider e grava
"""
from typing import Optional

from ddtrace import tracer

from application.ports.input.get_weather_port import IGetWeatherUseCase
from application.ports.output.weather_provider_port import IWeatherProvider
from application.services.cache_service import CacheService
from application.services.single_flight import SingleFlight
from domain.entities.tagged_result import TaggedResult
from domain.exceptions import InvalidQueryException
from domain.value_objects.cache_key import CacheKey
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class GetWeatherUseCase(IGetWeatherUseCase):
    """Busca clima de uma localização com cache em camadas"""

    def __init__(
        self,
        cache_service: CacheService,
        weather_provider: IWeatherProvider,
        single_flight: Optional[SingleFlight] = None,
        ttl_seconds: Optional[int] = None
    ):
        self.cache_service = cache_service
        self.weather_provider = weather_provider
        self.single_flight = single_flight or SingleFlight()
        self.ttl_seconds = ttl_seconds

    @tracer.wrap(resource="use_case.get_weather")
    async def execute(self, query: str) -> dict:
        if not query or not query.strip():
            raise InvalidQueryException(
                "Query parameter 'q' is required",
                details={"q": query}
            )

        key = str(CacheKey.for_weather(query))

        cached = await self.cache_service.get(key)
        if cached is not None:
            return cached.to_api_response()

        payload = await self.single_flight.do(key, lambda: self._fetch_and_store(key, query.strip()))
        return TaggedResult.fresh(payload).to_api_response()

    async def _fetch_and_store(self, key: str, query: str) -> dict:
        # Erros do provider propagam sem máscara; nada é gravado
        payload = await self.weather_provider.fetch_fresh(query)
        await self.cache_service.set(key, payload, self.ttl_seconds)

        logger.info(
            "Weather fetched successfully",
            key=key,
            provider=self.weather_provider.provider_name
        )
        return payload
