"""
Testes Unitários - RedisCacheClient
Cliente redis.asyncio substituído por AsyncMock
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from domain.exceptions import RemoteCacheUnavailableException
from infrastructure.adapters.cache.redis_cache_client import RedisCacheClient


@pytest.fixture
def redis_mock():
    mock = MagicMock()
    mock.ping = AsyncMock(return_value=True)
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=1)
    mock.aclose = AsyncMock()
    return mock


@pytest.fixture
def client(redis_mock):
    cache_client = RedisCacheClient(url='redis://cache:6379/0', operation_timeout=0.5, connect_timeout=0.5)
    cache_client._client = redis_mock
    return cache_client


class TestConnect:
    @pytest.mark.asyncio
    async def test_ping_success(self, client, redis_mock):
        await client.connect(timeout=1.0)

        redis_mock.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connection_refused_is_normalized(self, client, redis_mock):
        redis_mock.ping.side_effect = RedisConnectionError("Connection refused")

        with pytest.raises(RemoteCacheUnavailableException, match="ping failed"):
            await client.connect(timeout=1.0)

        # cliente descartado para permitir nova tentativa
        redis_mock.aclose.assert_awaited_once()
        assert client._client is None

    @pytest.mark.asyncio
    async def test_ping_timeout(self, client, redis_mock):
        async def hang():
            await asyncio.sleep(10)

        redis_mock.ping.side_effect = hang

        with pytest.raises(RemoteCacheUnavailableException, match="timed out"):
            await client.connect(timeout=0.05)

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        cache_client = RedisCacheClient(url='not-a-redis-url')

        with pytest.raises(RemoteCacheUnavailableException, match="Invalid Redis URL"):
            await cache_client.connect(timeout=0.1)

    def test_client_created_with_timeouts(self):
        cache_client = RedisCacheClient(url='redis://cache:6379/0', operation_timeout=0.7, connect_timeout=0.3)

        with patch('infrastructure.adapters.cache.redis_cache_client.redis.Redis.from_url') as from_url:
            cache_client._get_client()

        from_url.assert_called_once_with(
            'redis://cache:6379/0',
            socket_connect_timeout=0.3,
            socket_timeout=0.7,
            decode_responses=True
        )


class TestOperations:
    @pytest.mark.asyncio
    async def test_get_returns_value(self, client, redis_mock):
        redis_mock.get.return_value = '{"a":1}'

        assert await client.get('weather:london') == '{"a":1}'
        redis_mock.get.assert_awaited_once_with('weather:london')

    @pytest.mark.asyncio
    async def test_get_missing_key(self, client):
        assert await client.get('weather:london') is None

    @pytest.mark.asyncio
    async def test_set_uses_expiry_in_seconds(self, client, redis_mock):
        await client.set('weather:london', '{}', 300)

        redis_mock.set.assert_awaited_once_with('weather:london', '{}', ex=300)

    @pytest.mark.asyncio
    async def test_set_rounds_ttl_to_at_least_one_second(self, client, redis_mock):
        await client.set('weather:london', '{}', 0.4)

        redis_mock.set.assert_awaited_once_with('weather:london', '{}', ex=1)

    @pytest.mark.asyncio
    async def test_delete(self, client, redis_mock):
        await client.delete('weather:london')

        redis_mock.delete.assert_awaited_once_with('weather:london')

    @pytest.mark.asyncio
    async def test_operation_error_is_normalized(self, client, redis_mock):
        redis_mock.get.side_effect = RedisConnectionError("reset by peer")

        with pytest.raises(RemoteCacheUnavailableException) as exc_info:
            await client.get('weather:london')

        assert exc_info.value.details['operation'] == 'get'

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, client, redis_mock):
        await client.close()
        await client.close()

        redis_mock.aclose.assert_awaited_once()
