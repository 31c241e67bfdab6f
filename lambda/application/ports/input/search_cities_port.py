"""
Input Port: Interface para autocomplete de cidades
"""
from abc import ABC, abstractmethod
from typing import List


class ISearchCitiesUseCase(ABC):
    """Interface para caso de uso de busca de cidades"""

    @abstractmethod
    async def execute(self, query: str) -> List[dict]:
        """
        Busca sugestões de cidades

        Raises:
            InvalidQueryException: Se a consulta tiver menos de 2 caracteres
        """
        pass
