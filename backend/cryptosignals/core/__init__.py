"""
核心模块
"""
from .config import settings, get_settings, Settings

__all__ = ["settings", "get_settings", "Settings"]
