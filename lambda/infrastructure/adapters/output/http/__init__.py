"""HTTP clients"""
from .aiohttp_session_manager import AiohttpSessionManager

__all__ = ['AiohttpSessionManager']
