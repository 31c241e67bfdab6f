"""Input Ports - contratos dos use cases"""
from .get_weather_port import IGetWeatherUseCase
from .search_cities_port import ISearchCitiesUseCase

__all__ = ['IGetWeatherUseCase', 'ISearchCitiesUseCase']
