"""WeatherAPI Provider - Implementação do provider para WeatherAPI.com"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from ddtrace import tracer
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

from application.ports.output.weather_provider_port import IWeatherProvider
from domain.constants import API, Search
from domain.entities.location_suggestion import LocationSuggestion
from domain.exceptions import WeatherProviderException
from infrastructure.adapters.output.http.aiohttp_session_manager import AiohttpSessionManager
from infrastructure.adapters.output.providers.weatherapi.mappers import WeatherApiDataMapper
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class WeatherApiProvider(IWeatherProvider):
    """
    Provider para WeatherAPI.com

    Características:
    - /forecast.json: condições atuais + previsão de 1 dia
    - /search.json: autocomplete de cidades
    - Retry com backoff exponencial em 429/503/timeouts
    - 100% async com aiohttp
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = API.WEATHERAPI_BASE_URL,
        session_manager: Optional[AiohttpSessionManager] = None
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.session_manager = session_manager or AiohttpSessionManager()

        if not self.api_key:
            logger.warning("WEATHER_API_KEY environment variable is not set")

    @property
    def provider_name(self) -> str:
        return "WeatherAPI"

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        """
        GET com retry; erros HTTP viram WeatherProviderException

        Raises:
            WeatherProviderException: status upstream em erros HTTP, None em erros de transporte
        """
        url = f"{self.base_url}{path}"
        query = {'key': self.api_key, **params}
        session = await self.session_manager.get_session()

        # Retry com exponential backoff para rate limiting
        @retry(
            retry=retry_if_exception_type((aiohttp.ClientResponseError, asyncio.TimeoutError)),
            stop=stop_after_attempt(API.RETRY_ATTEMPTS),
            wait=wait_exponential(multiplier=1, min=1, max=4),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        async def fetch_with_retry():
            async with session.get(url, params=query) as response:
                # Apenas retry em rate limit (429) e service unavailable (503)
                if response.status in API.RETRY_STATUS_CODES:
                    raise aiohttp.ClientResponseError(
                        request_info=response.request_info,
                        history=response.history,
                        status=response.status,
                        message=response.reason or ''
                    )

                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None

                if response.status >= 400:
                    message = WeatherApiDataMapper.extract_error_message(body) or 'Unknown error occurred'
                    raise WeatherProviderException(
                        f"Weather API error ({response.status}): {message}",
                        status_code=response.status,
                        details={"path": path}
                    )

                if body is None:
                    raise WeatherProviderException(
                        "Weather API error: invalid JSON response",
                        details={"path": path}
                    )

                return body

        try:
            return await fetch_with_retry()
        except aiohttp.ClientResponseError as e:
            raise WeatherProviderException(
                f"Weather API error ({e.status}): {e.message or 'Unknown error occurred'}",
                status_code=e.status,
                details={"path": path}
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise WeatherProviderException(
                f"Weather API error: {str(e) or type(e).__name__}",
                details={"path": path}
            ) from e

    @tracer.wrap(resource="weatherapi.fetch_fresh")
    async def fetch_fresh(self, query: str) -> Dict[str, Any]:
        data = await self._get_json('/forecast.json', {
            'q': query,
            'days': API.WEATHERAPI_FORECAST_DAYS,
            'aqi': 'no',
            'alerts': 'no'
        })

        if not isinstance(data, dict):
            raise WeatherProviderException(
                "Weather API error: unexpected response format",
                details={"query": query}
            )

        logger.info("Weather fetched from provider", query=query, provider=self.provider_name)
        return WeatherApiDataMapper.map_forecast_response(data)

    @tracer.wrap(resource="weatherapi.search_locations")
    async def search_locations(self, query: str) -> List[LocationSuggestion]:
        if not query or len(query) < Search.MIN_QUERY_LENGTH:
            return []

        try:
            data = await self._get_json('/search.json', {'q': query})
        except WeatherProviderException as e:
            logger.warning("City search error", query=query, error=e.message, status_code=e.status_code)
            return []

        return WeatherApiDataMapper.map_search_response(data)
