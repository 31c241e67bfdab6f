"""
Serialização do envelope gravado no cache remoto
JSON compacto do payload com o campo cachedAt (ISO-8601)
"""
import json
from typing import Any, Dict, Optional, Tuple

from domain.constants import Cache
from domain.entities.tagged_result import strip_cache_metadata
from domain.exceptions import CacheDeserializationException
from shared.utils.datetime_parser import DateTimeParser


def encode_entry(payload: Dict[str, Any], inserted_at: float) -> str:
    """
    Serializa payload + cachedAt

    Raises:
        TypeError: Se o payload não for serializável em JSON
    """
    envelope = strip_cache_metadata(payload)
    envelope[Cache.CACHED_AT_FIELD] = DateTimeParser.to_iso(inserted_at)
    return json.dumps(envelope, separators=(',', ':'))


def decode_entry(raw: Any) -> Tuple[Dict[str, Any], Optional[float]]:
    """
    Desserializa envelope do cache remoto

    Returns:
        (payload sem metadados de cache, inserted_at ou None se ausente)

    Raises:
        CacheDeserializationException: JSON inválido, não-objeto ou cachedAt inválido
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise CacheDeserializationException("Cached value is not valid UTF-8", details={"error": str(e)}) from e

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise CacheDeserializationException("Cached value is not valid JSON", details={"error": str(e)}) from e

    if not isinstance(data, dict):
        raise CacheDeserializationException(
            "Cached value is not a JSON object",
            details={"type": type(data).__name__}
        )

    try:
        inserted_at = DateTimeParser.from_iso(data.get(Cache.CACHED_AT_FIELD))
    except ValueError as e:
        raise CacheDeserializationException(
            "Cached value has an invalid cachedAt",
            details={"cachedAt": data.get(Cache.CACHED_AT_FIELD)}
        ) from e

    return strip_cache_metadata(data), inserted_at
