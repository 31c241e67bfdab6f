"""
DateTime Parser Utility
Conversão entre timestamps epoch e strings ISO-8601 (UTC)
"""
from datetime import datetime, timezone
from typing import Optional


class DateTimeParser:
    """Converte timestamps usados pelo cache"""

    @staticmethod
    def to_iso(timestamp: float) -> str:
        """
        Converte epoch (segundos) para ISO-8601 UTC com milissegundos

        Examples:
            >>> DateTimeParser.to_iso(1000)
            '1970-01-01T00:16:40.000Z'
        """
        value = datetime.fromtimestamp(timestamp, tz=timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @staticmethod
    def from_iso(value: Optional[str]) -> Optional[float]:
        """
        Converte string ISO-8601 para epoch (segundos)

        Args:
            value: Data ISO-8601 ('Z' ou offset explícito); sem offset assume UTC

        Returns:
            Timestamp epoch ou None se value vazio

        Raises:
            ValueError: Se o formato for inválido
        """
        if not value:
            return None

        if not isinstance(value, str):
            raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}")

        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp()
