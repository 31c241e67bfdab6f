"""
Use Case: Search Cities
Autocomplete de cidades via provider (sem cache)
"""
from typing import List

from ddtrace import tracer

from application.ports.input.search_cities_port import ISearchCitiesUseCase
from application.ports.output.weather_provider_port import IWeatherProvider
from domain.constants import Search
from domain.exceptions import InvalidQueryException


class SearchCitiesUseCase(ISearchCitiesUseCase):
    """Busca sugestões de cidades"""

    def __init__(self, weather_provider: IWeatherProvider):
        self.weather_provider = weather_provider

    @tracer.wrap(resource="use_case.search_cities")
    async def execute(self, query: str) -> List[dict]:
        query = (query or '').strip()
        if len(query) < Search.MIN_QUERY_LENGTH:
            raise InvalidQueryException(
                f"Query parameter 'q' must be at least {Search.MIN_QUERY_LENGTH} characters long",
                details={"q": query}
            )

        suggestions = await self.weather_provider.search_locations(query)
        return [suggestion.to_api_response() for suggestion in suggestions]
