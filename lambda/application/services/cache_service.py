"""
Serviço de cache em camadas para a camada de aplicação
Prefere o cache remoto compartilhado e cai no store local de forma transparente
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

from ddtrace import tracer

from application.ports.output.cache_health_port import ICacheHealthCheck
from application.ports.output.cache_store_port import ICacheStore
from application.ports.output.remote_cache_port import IRemoteCacheClient
from application.services.cache_codec import decode_entry, encode_entry
from application.services.cache_health import DisabledHealthCheck
from domain.constants import Cache
from domain.entities.tagged_result import TaggedResult, strip_cache_metadata
from domain.exceptions import CacheDeserializationException
from shared.config.logger_config import get_logger
from shared.utils.clock import Clock, SystemClock

logger = get_logger(child=True)


@dataclass
class CacheStats:
    """Contadores do processo (expostos no /health)"""
    remote_hits: int = 0
    memory_hits: int = 0
    misses: int = 0
    remote_errors: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class CacheService:
    """
    Fachada get/set/delete do cache

    - Remoto alcançável: lê/grava no remoto; store local sempre recebe cópia
    - Remoto indisponível ou com erro: usa apenas o store local
    - Nenhum erro de cache é propagado: no pior caso, toda leitura é miss
    """

    def __init__(
        self,
        store: ICacheStore,
        remote_client: Optional[IRemoteCacheClient] = None,
        health_check: Optional[ICacheHealthCheck] = None,
        clock: Optional[Clock] = None,
        default_ttl: int = Cache.DEFAULT_TTL
    ):
        self.store = store
        self.remote_client = remote_client
        self.health_check = health_check or DisabledHealthCheck()
        self.clock = clock or SystemClock()
        self.default_ttl = default_ttl
        self.stats = CacheStats()
        self._diverged: Dict[str, float] = {}
        self._longest_ttl: float = default_ttl

    def _remote_available(self) -> bool:
        return self.remote_client is not None and self.health_check.is_reachable()

    def _on_remote_failure(self, operation: str, key: str, error: Exception) -> None:
        self.stats.remote_errors += 1
        logger.warning(
            "Remote cache operation failed, using in-memory cache",
            operation=operation,
            key=key,
            error=str(error),
            error_type=type(error).__name__
        )
        self.health_check.report_failure(error)

    def _mark_diverged(self, key: str, ttl: float) -> None:
        """
        Registra que o remoto pode guardar um valor anterior para a chave

        Acontece quando set/delete não chegou ao remoto. Enquanto marcada, a
        chave é lida só do store local; a marca vence junto com o valor antigo.
        """
        if self.remote_client is None:
            return
        now = self.clock.now()
        self._longest_ttl = max(self._longest_ttl, ttl)
        self._diverged = {k: deadline for k, deadline in self._diverged.items() if deadline > now}
        self._diverged[key] = now + self._longest_ttl

    def _is_diverged(self, key: str) -> bool:
        deadline = self._diverged.get(key)
        if deadline is None:
            return False
        if self.clock.now() >= deadline:
            del self._diverged[key]
            return False
        return True

    @tracer.wrap(resource="cache.get")
    async def get(self, key: str) -> Optional[TaggedResult]:
        """
        Busca entrada visível

        Com as duas camadas preenchidas vence a inserção mais recente.

        Returns:
            TaggedResult (cached=True, cached_at = inserção original) ou None
        """
        entry = self.store.get_entry(key)

        if self._remote_available():
            if self._is_diverged(key):
                # Tenta descartar o valor antigo; até lá o remoto é ignorado
                if await self._delete_remote(key):
                    self._diverged.pop(key, None)
            else:
                result = await self._get_remote(key)
                if result is not None and (entry is None or result.cached_at >= entry.inserted_at):
                    self.stats.remote_hits += 1
                    logger.info("Cache hit", key=key, tier="remote")
                    return result

        if entry is None:
            self.stats.misses += 1
            logger.debug("Cache miss", key=key)
            return None

        self.stats.memory_hits += 1
        logger.info("Cache hit", key=key, tier="memory")
        return TaggedResult.from_cache(entry.payload, entry.inserted_at)

    async def _get_remote(self, key: str) -> Optional[TaggedResult]:
        try:
            raw = await self.remote_client.get(key)
        except Exception as e:
            self._on_remote_failure("get", key, e)
            return None

        if raw is None:
            return None

        try:
            payload, inserted_at = decode_entry(raw)
        except CacheDeserializationException as e:
            logger.warning("Discarding malformed remote cache entry", key=key, error=e.message, details=e.details)
            await self._delete_remote(key)
            return None

        if inserted_at is None:
            inserted_at = self.clock.now()

        return TaggedResult.from_cache(payload, inserted_at)

    @tracer.wrap(resource="cache.set")
    async def set(self, key: str, payload: Dict[str, Any], ttl_seconds: Optional[int] = None) -> None:
        """
        Grava payload com inserted_at = agora

        Write-through no remoto (se alcançável) e cópia no store local.
        Retorna somente depois das duas gravações (ou da falha absorvida).
        Se o remoto não recebeu o novo valor, o valor antigo dele nunca é servido.
        """
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        inserted_at = self.clock.now()
        clean_payload = strip_cache_metadata(payload)

        written = self._remote_available() and await self._set_remote(key, clean_payload, inserted_at, ttl)
        if written:
            self._diverged.pop(key, None)
        else:
            self._mark_diverged(key, ttl)

        self.store.put(key, clean_payload, ttl, inserted_at=inserted_at)
        logger.info("Cached weather data", key=key, ttl_seconds=ttl, remote=written)

    async def _set_remote(self, key: str, payload: Dict[str, Any], inserted_at: float, ttl: int) -> bool:
        """Grava no remoto; em falha tenta remover o valor antigo. True se o remoto ficou consistente"""
        try:
            raw = encode_entry(payload, inserted_at)
        except (TypeError, ValueError) as e:
            logger.warning("Payload is not JSON serializable, skipping remote cache", key=key, error=str(e))
            return await self._delete_remote(key)

        try:
            await self.remote_client.set(key, raw, ttl)
        except Exception as e:
            self._on_remote_failure("set", key, e)
            return await self._delete_remote(key)
        return True

    @tracer.wrap(resource="cache.delete")
    async def delete(self, key: str) -> None:
        """Remove a chave dos dois tiers; falhas no remoto são absorvidas"""
        if self._remote_available() and await self._delete_remote(key):
            self._diverged.pop(key, None)
        else:
            self._mark_diverged(key, self.default_ttl)

        self.store.remove(key)

    async def _delete_remote(self, key: str) -> bool:
        try:
            await self.remote_client.delete(key)
        except Exception as e:
            self._on_remote_failure("delete", key, e)
            return False
        return True
