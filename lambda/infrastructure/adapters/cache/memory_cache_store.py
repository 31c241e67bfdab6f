"""
Output Adapter: Store de cache em memória com TTL
Expiração lazy na leitura + varredura periódica (ExpirySweeper)
"""
from threading import RLock
from typing import Any, Dict, Optional

from application.ports.output.cache_store_port import ICacheStore
from domain.entities.cache_entry import CacheEntry
from shared.utils.clock import Clock, SystemClock


class InMemoryCacheStore(ICacheStore):
    """
    Store local, compartilhado entre requisições do mesmo processo

    - put/get/remove/sweep protegidos por RLock
    - get nunca devolve entrada expirada, mesmo antes da próxima varredura
    - sweep existe apenas para liberar memória
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or SystemClock()
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = RLock()

    def put(self, key: str, payload: Any, ttl_seconds: float, inserted_at: Optional[float] = None) -> CacheEntry:
        if inserted_at is None:
            inserted_at = self._clock.now()

        entry = CacheEntry.create(key, payload, ttl_seconds, inserted_at)
        with self._lock:
            self._entries[key] = entry
        return entry

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        now = self._clock.now()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_visible(now):
                # Expirou: remover para não acumular
                del self._entries[key]
                return None
            return entry

    def get(self, key: str) -> Optional[Any]:
        entry = self.get_entry(key)
        return entry.payload if entry else None

    def remove(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def sweep(self, now: Optional[float] = None) -> int:
        if now is None:
            now = self._clock.now()

        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries
