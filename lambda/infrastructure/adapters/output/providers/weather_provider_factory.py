"""
Weather Provider Factory - seleção do provider por configuração
"""
from typing import Callable, Dict, Optional

from application.ports.output.weather_provider_port import IWeatherProvider
from infrastructure.adapters.output.http.aiohttp_session_manager import AiohttpSessionManager
from infrastructure.adapters.output.providers.weatherapi import WeatherApiProvider
from shared.config.settings import Settings

ProviderBuilder = Callable[[Settings, AiohttpSessionManager], IWeatherProvider]


def _build_weatherapi(settings: Settings, session_manager: AiohttpSessionManager) -> IWeatherProvider:
    return WeatherApiProvider(
        api_key=settings.weather_api_key,
        base_url=settings.weather_api_base_url,
        session_manager=session_manager
    )


class WeatherProviderFactory:
    """
    Factory do provider de clima.
    Exatamente um adapter é selecionado (WEATHER_PROVIDER) e reutilizado.
    """

    BUILDERS: Dict[str, ProviderBuilder] = {
        "weatherapi": _build_weatherapi,
    }

    def __init__(self, settings: Settings, session_manager: Optional[AiohttpSessionManager] = None):
        self.settings = settings
        self.session_manager = session_manager or AiohttpSessionManager()
        self._provider: Optional[IWeatherProvider] = None

    def get_weather_provider(self) -> IWeatherProvider:
        """
        Retorna o provider configurado (lazy, instância única por factory)

        Raises:
            ValueError: Se WEATHER_PROVIDER não for suportado
        """
        if self._provider is None:
            name = self.settings.weather_provider
            builder = self.BUILDERS.get(name)
            if builder is None:
                supported = ", ".join(sorted(self.BUILDERS))
                raise ValueError(f"Unsupported WEATHER_PROVIDER {name!r} (supported: {supported})")
            self._provider = builder(self.settings, self.session_manager)
        return self._provider
