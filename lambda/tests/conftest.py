"""
Fixtures compartilhadas entre testes unitários e de integração
Fakes dos ports de saída (cache remoto e provider de clima)
"""
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

# Sem agente Datadog durante os testes
os.environ.setdefault('DD_TRACE_ENABLED', 'false')
os.environ.setdefault('POWERTOOLS_LOG_DEDUPLICATION_DISABLED', '1')

import pytest

from application.ports.output.remote_cache_port import IRemoteCacheClient
from application.ports.output.weather_provider_port import IWeatherProvider
from domain.entities.location_suggestion import LocationSuggestion
from domain.exceptions import RemoteCacheUnavailableException
from shared.utils.clock import FakeClock

FIXTURES_PATH = Path(__file__).parent / 'fixtures' / 'weatherapi_sample_responses.json'


class FakeRemoteCacheClient(IRemoteCacheClient):
    """Redis em memória com TTL pelo relógio injetado e falhas controláveis"""

    def __init__(self, clock: FakeClock, url: str = 'redis://fake:6379'):
        self._url = url
        self.clock = clock
        self.data: Dict[str, tuple] = {}
        self.fail_connect = False
        self.fail_operations = False
        self.connect_calls = 0
        self.calls: List[tuple] = []

    @property
    def url(self) -> str:
        return self._url

    def _check(self, operation: str) -> None:
        if self.fail_operations:
            raise RemoteCacheUnavailableException(f"Redis {operation} failed: connection refused")

    async def connect(self, timeout: float) -> None:
        self.connect_calls += 1
        if self.fail_connect:
            raise RemoteCacheUnavailableException("Redis ping failed: connection refused")

    async def get(self, key: str) -> Optional[str]:
        self.calls.append(('get', key))
        self._check('get')
        item = self.data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self.clock.now() >= expires_at:
            del self.data[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.calls.append(('set', key))
        self._check('set')
        self.data[key] = (value, self.clock.now() + ttl_seconds)

    async def delete(self, key: str) -> None:
        self.calls.append(('delete', key))
        self._check('delete')
        self.data.pop(key, None)

    async def close(self) -> None:
        pass


class FakeWeatherProvider(IWeatherProvider):
    """Provider em memória: conta chamadas e pode falhar sob demanda"""

    def __init__(self, payloads: Optional[Dict[str, dict]] = None, suggestions=None):
        self.payloads = payloads or {}
        self.suggestions: List[LocationSuggestion] = suggestions or []
        self.fetch_calls: List[str] = []
        self.search_calls: List[str] = []
        self.error: Optional[Exception] = None

    @property
    def provider_name(self) -> str:
        return "Fake"

    async def fetch_fresh(self, query: str) -> Dict[str, Any]:
        self.fetch_calls.append(query)
        if self.error is not None:
            raise self.error
        return self.payloads.get(query.lower(), {'location': {'name': query}, 'current': {'temp_c': 20.0}})

    async def search_locations(self, query: str) -> List[LocationSuggestion]:
        self.search_calls.append(query)
        return list(self.suggestions)


@pytest.fixture
def weatherapi_samples() -> Dict[str, Any]:
    """Respostas reais (reduzidas) da WeatherAPI.com"""
    with open(FIXTURES_PATH, 'r', encoding='utf-8') as f:
        return json.load(f)


@pytest.fixture
def london_payload(weatherapi_samples) -> Dict[str, Any]:
    data = weatherapi_samples['london_forecast']
    return {section: data[section] for section in ('location', 'current', 'forecast')}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=1000.0)


@pytest.fixture
def fake_remote(clock) -> FakeRemoteCacheClient:
    return FakeRemoteCacheClient(clock)


@pytest.fixture
def fake_provider(london_payload) -> FakeWeatherProvider:
    return FakeWeatherProvider(
        payloads={'london': london_payload},
        suggestions=[
            LocationSuggestion(
                id=2801268, name='London', region='City of London, Greater London',
                country='United Kingdom', lat=51.52, lon=-0.11,
                url='london-city-of-london-greater-london-united-kingdom'
            )
        ]
    )
