"""
Aiohttp Session Manager - sessão HTTP compartilhada pelos providers
Pertence ao container da aplicação (criado na inicialização do servidor)
"""
import asyncio
from typing import Optional

import aiohttp

from domain.constants import API
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class AiohttpSessionManager:
    """
    Gerenciador de sessão aiohttp

    - Reutiliza a sessão dentro do mesmo event loop (pool de conexões)
    - Recria a sessão se o event loop mudar ou a sessão for fechada

    Uso:
        manager = AiohttpSessionManager()
        session = await manager.get_session()
        async with session.get(url) as response:
            data = await response.json()
    """

    def __init__(
        self,
        total_timeout: float = API.HTTP_TIMEOUT_TOTAL,
        connect_timeout: float = API.HTTP_TIMEOUT_CONNECT,
        sock_read_timeout: float = API.HTTP_TIMEOUT_READ,
        limit: int = API.HTTP_CONNECTION_LIMIT,
        limit_per_host: int = API.HTTP_CONNECTION_LIMIT_PER_HOST,
        ttl_dns_cache: int = API.DNS_CACHE_TTL
    ):
        self.total_timeout = total_timeout
        self.connect_timeout = connect_timeout
        self.sock_read_timeout = sock_read_timeout
        self.limit = limit
        self.limit_per_host = limit_per_host
        self.ttl_dns_cache = ttl_dns_cache

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop_id: Optional[int] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """Retorna sessão aiohttp (cria ou reutiliza)"""
        current_loop_id = id(asyncio.get_running_loop())

        if (self._session is not None and
                not self._session.closed and
                self._session_loop_id == current_loop_id):
            return self._session

        if self._session is not None and not self._session.closed:
            logger.info(
                "Event loop changed - recreating session",
                old_loop_id=self._session_loop_id,
                new_loop_id=current_loop_id
            )
            await self.close()

        timeout = aiohttp.ClientTimeout(
            total=self.total_timeout,
            connect=self.connect_timeout,
            sock_read=self.sock_read_timeout
        )
        connector = aiohttp.TCPConnector(
            limit=self.limit,
            limit_per_host=self.limit_per_host,
            ttl_dns_cache=self.ttl_dns_cache
        )
        self._session = aiohttp.ClientSession(timeout=timeout, connector=connector)
        self._session_loop_id = current_loop_id

        logger.info("Aiohttp session created", loop_id=current_loop_id, limit=self.limit)
        return self._session

    async def close(self) -> None:
        """Fecha a sessão atual (se houver)"""
        if self._session is None:
            return

        session, self._session = self._session, None
        self._session_loop_id = None
        if session.closed:
            return

        try:
            await session.close()
        except aiohttp.ClientError as e:
            logger.warning("Error closing aiohttp session", error=str(e))
