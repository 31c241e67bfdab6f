"""Domain Entities"""
from .cache_entry import CacheEntry
from .location_suggestion import LocationSuggestion
from .tagged_result import TaggedResult, strip_cache_metadata

__all__ = ['CacheEntry', 'LocationSuggestion', 'TaggedResult', 'strip_cache_metadata']
