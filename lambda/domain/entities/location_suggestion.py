"""
LocationSuggestion Entity - Sugestão de cidade retornada pela busca
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class LocationSuggestion:
    """Entidade de sugestão de localização"""
    id: int
    name: str
    region: str
    country: str
    lat: float
    lon: float
    url: Optional[str] = None  # slug do provider, não exposto na API

    def to_api_response(self) -> dict:
        """Converte para formato de resposta da API"""
        return {
            'id': self.id,
            'name': self.name,
            'region': self.region,
            'country': self.country,
            'lat': self.lat,
            'lon': self.lon
        }
