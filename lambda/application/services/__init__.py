"""Application Services - cache em camadas e tarefas de background"""
from .cache_service import CacheService, CacheStats
from .expiry_sweeper import ExpirySweeper
from .periodic_task import PeriodicTask
from .single_flight import SingleFlight

__all__ = ['CacheService', 'CacheStats', 'ExpirySweeper', 'PeriodicTask', 'SingleFlight']
