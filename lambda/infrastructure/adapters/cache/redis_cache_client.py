"""
Output Adapter: Cliente Redis assíncrono para o tier remoto do cache
Erros de conexão/timeout/protocolo viram RemoteCacheUnavailableException
"""
import asyncio
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from application.ports.output.remote_cache_port import IRemoteCacheClient
from domain.constants import Cache
from domain.exceptions import RemoteCacheUnavailableException
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class RedisCacheClient(IRemoteCacheClient):
    """
    Cliente Redis (redis.asyncio) com timeouts curtos

    O cliente é criado sob demanda dentro do event loop em execução e
    descartado após falha de conexão, permitindo nova tentativa (re-probe).
    """

    def __init__(
        self,
        url: str = Cache.DEFAULT_REDIS_URL,
        operation_timeout: float = Cache.OPERATION_TIMEOUT,
        connect_timeout: float = Cache.CONNECT_TIMEOUT
    ):
        self._url = url
        self.operation_timeout = operation_timeout
        self.connect_timeout = connect_timeout
        self._client: Optional[redis.Redis] = None

    @property
    def url(self) -> str:
        return self._url

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(
                self._url,
                socket_connect_timeout=self.connect_timeout,
                socket_timeout=self.operation_timeout,
                decode_responses=True
            )
        return self._client

    async def _call(self, operation: str, coro_factory, timeout: Optional[float] = None):
        """Executa comando limitando o tempo e normalizando erros"""
        try:
            return await asyncio.wait_for(coro_factory(), timeout=timeout or self.operation_timeout)
        except asyncio.TimeoutError as e:
            raise RemoteCacheUnavailableException(
                f"Redis {operation} timed out",
                details={"operation": operation, "url": self._url}
            ) from e
        except (RedisError, OSError) as e:
            raise RemoteCacheUnavailableException(
                f"Redis {operation} failed: {e}",
                details={"operation": operation, "url": self._url}
            ) from e

    async def connect(self, timeout: float) -> None:
        self.connect_timeout = timeout
        try:
            client = self._get_client()
        except ValueError as e:
            raise RemoteCacheUnavailableException(
                f"Invalid Redis URL: {e}",
                details={"url": self._url}
            ) from e

        try:
            await self._call("ping", client.ping, timeout=timeout)
        except RemoteCacheUnavailableException:
            await self.close()
            raise

    async def get(self, key: str) -> Optional[str]:
        client = self._get_client()
        return await self._call("get", lambda: client.get(key))

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        client = self._get_client()
        await self._call("set", lambda: client.set(key, value, ex=max(1, int(ttl_seconds))))

    async def delete(self, key: str) -> None:
        client = self._get_client()
        await self._call("delete", lambda: client.delete(key))

    async def close(self) -> None:
        if self._client is None:
            return

        client, self._client = self._client, None
        try:
            await client.aclose()
        except (RedisError, OSError) as e:
            logger.warning("Error closing Redis client", error=str(e), url=self._url)
