"""Infrastructure Providers - Implementações de provedores climáticos"""

from infrastructure.adapters.output.providers.weatherapi import WeatherApiProvider
from infrastructure.adapters.output.providers.weather_provider_factory import WeatherProviderFactory

__all__ = ['WeatherApiProvider', 'WeatherProviderFactory']
