"""
Testes Unitários - GetWeatherUseCase (cache-aside)
"""
import asyncio

import pytest

from application.services.cache_health import DisabledHealthCheck
from application.services.cache_service import CacheService
from application.use_cases.get_weather_use_case import GetWeatherUseCase
from domain.exceptions import InvalidQueryException, WeatherProviderException
from infrastructure.adapters.cache.memory_cache_store import InMemoryCacheStore


@pytest.fixture
def cache_service(clock):
    return CacheService(
        store=InMemoryCacheStore(clock=clock),
        health_check=DisabledHealthCheck(),
        clock=clock,
        default_ttl=300
    )


@pytest.fixture
def use_case(cache_service, fake_provider):
    return GetWeatherUseCase(cache_service=cache_service, weather_provider=fake_provider)


class TestGetWeatherUseCase:
    """Fluxo miss -> fetch -> set -> hit"""

    @pytest.mark.asyncio
    async def test_miss_fetches_and_returns_fresh(self, use_case, fake_provider, london_payload):
        response = await use_case.execute('London')

        assert response['cached'] is False
        assert 'cachedAt' not in response
        assert response['location'] == london_payload['location']
        assert fake_provider.fetch_calls == ['London']

    @pytest.mark.asyncio
    async def test_second_request_is_cache_hit(self, use_case, fake_provider, clock):
        await use_case.execute('London')
        clock.advance(100)

        response = await use_case.execute('london')

        assert response['cached'] is True
        assert response['cachedAt'] == '1970-01-01T00:16:40.000Z'
        assert len(fake_provider.fetch_calls) == 1

    @pytest.mark.asyncio
    async def test_expired_entry_fetches_again(self, use_case, fake_provider, clock):
        await use_case.execute('London')
        clock.advance(301)

        response = await use_case.execute('London')

        assert response['cached'] is False
        assert len(fake_provider.fetch_calls) == 2

    @pytest.mark.asyncio
    async def test_custom_ttl(self, cache_service, fake_provider, clock):
        use_case = GetWeatherUseCase(cache_service, fake_provider, ttl_seconds=30)
        await use_case.execute('London')
        clock.advance(31)

        assert (await use_case.execute('London'))['cached'] is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize('query', ['', '   ', None])
    async def test_missing_query(self, use_case, fake_provider, query):
        with pytest.raises(InvalidQueryException, match="Query parameter 'q' is required"):
            await use_case.execute(query)

        assert fake_provider.fetch_calls == []

    @pytest.mark.asyncio
    async def test_provider_error_propagates_and_nothing_is_cached(self, use_case, fake_provider, cache_service):
        fake_provider.error = WeatherProviderException("Weather API error (400): No matching location found.", status_code=400)

        with pytest.raises(WeatherProviderException) as exc_info:
            await use_case.execute('Atlantis')

        assert exc_info.value.status_code == 400
        assert await cache_service.get('weather:atlantis') is None

    @pytest.mark.asyncio
    async def test_concurrent_misses_fetch_once(self, cache_service):
        release = asyncio.Event()
        calls = []

        class SlowProvider:
            provider_name = "Slow"

            async def fetch_fresh(self, query):
                calls.append(query)
                await release.wait()
                return {'location': {'name': query}}

        use_case = GetWeatherUseCase(cache_service, SlowProvider())
        tasks = [asyncio.create_task(use_case.execute('Lisbon')) for _ in range(4)]
        await asyncio.sleep(0.01)
        release.set()
        results = await asyncio.gather(*tasks)

        assert len(calls) == 1
        assert all(r['location'] == {'name': 'Lisbon'} for r in results)
