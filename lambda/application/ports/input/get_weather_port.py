"""
Input Port: Interface para buscar o clima de uma localização
"""
from abc import ABC, abstractmethod


class IGetWeatherUseCase(ABC):
    """Interface para caso de uso de buscar clima (cache + provider)"""

    @abstractmethod
    async def execute(self, query: str) -> dict:
        """
        Busca condições atuais e previsão de um dia

        Args:
            query: Consulta de localização (ex: "London")

        Returns:
            Payload de clima com cached e, em hit, cachedAt

        Raises:
            InvalidQueryException: Se a consulta estiver vazia
            WeatherProviderException: Se o provider falhar em um miss
        """
        pass
