from .base import AlpacaFetcher
from .news import AlpacaNewsFetcher
from .bars import AlpacaBarsFetcher

__all__ = ["AlpacaFetcher", "AlpacaNewsFetcher", "AlpacaBarsFetcher"]
