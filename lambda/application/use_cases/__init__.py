"""Application Use Cases - 100% ASYNC"""
from .get_weather_use_case import GetWeatherUseCase
from .search_cities_use_case import SearchCitiesUseCase

__all__ = [
    'GetWeatherUseCase',
    'SearchCitiesUseCase'
]
