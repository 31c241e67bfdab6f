"""Weather Provider Port - Interface genérica para provedores climáticos"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from domain.entities.location_suggestion import LocationSuggestion


class IWeatherProvider(ABC):
    """
    Interface genérica para provedores de dados meteorológicos.
    Um único adapter concreto é selecionado por configuração; o cache
    não conhece o provider.
    """

    @abstractmethod
    async def fetch_fresh(self, query: str) -> Dict[str, Any]:
        """
        Busca condições atuais + previsão de um dia

        Args:
            query: Consulta de localização (nome da cidade, "lat,lon", etc.)

        Returns:
            Payload com location, current e forecast

        Raises:
            WeatherProviderException: Se o provider falhar (status upstream preservado)
        """
        pass

    @abstractmethod
    async def search_locations(self, query: str) -> List[LocationSuggestion]:
        """
        Busca sugestões de cidades para autocomplete

        Returns:
            Lista de sugestões (vazia em caso de falha)
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nome do provider (ex: 'WeatherAPI')"""
        pass
