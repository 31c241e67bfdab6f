"""
WeatherAPI Data Mapper - Transforma respostas da WeatherAPI.com
LOCALIZAÇÃO: infrastructure (transforma dados externos → domínio)
"""
import zlib
from typing import Any, Dict, List, Optional

from domain.entities.location_suggestion import LocationSuggestion
from shared.config.logger_config import get_logger

logger = get_logger(child=True)

# Seções do payload de clima repassadas ao cliente
FORECAST_SECTIONS = ('location', 'current', 'forecast')


class WeatherApiDataMapper:
    """Mapper estático para respostas da WeatherAPI.com"""

    @staticmethod
    def map_forecast_response(data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Mantém apenas location, current e forecast do /forecast.json

        Args:
            data: Resposta bruta da API

        Returns:
            Payload de clima (opaco para o cache)
        """
        return {section: data[section] for section in FORECAST_SECTIONS if section in data}

    @staticmethod
    def map_search_response(items: Any) -> List[LocationSuggestion]:
        """
        Converte resposta do /search.json em sugestões

        Itens sem nome são ignorados; id ausente vira um CRC32 estável
        de name|region|country.
        """
        if not isinstance(items, list):
            return []

        suggestions = []
        for item in items:
            if not isinstance(item, dict) or not item.get('name'):
                continue

            name = item['name']
            region = item.get('region') or ''
            country = item.get('country') or ''

            suggestions.append(LocationSuggestion(
                id=item.get('id') or WeatherApiDataMapper.fallback_id(name, region, country),
                name=name,
                region=region,
                country=country,
                lat=float(item.get('lat', 0.0)),
                lon=float(item.get('lon', 0.0)),
                url=item.get('url')
            ))

        return suggestions

    @staticmethod
    def fallback_id(name: str, region: str, country: str) -> int:
        return zlib.crc32(f"{name}|{region}|{country}".encode('utf-8'))

    @staticmethod
    def extract_error_message(body: Any) -> Optional[str]:
        """Lê {"error": {"code": ..., "message": ...}} do corpo de erro"""
        if isinstance(body, dict):
            error = body.get('error')
            if isinstance(error, dict) and error.get('message'):
                return str(error['message'])
        return None
