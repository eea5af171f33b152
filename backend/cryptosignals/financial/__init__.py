"""
CryptoSignals 行情数据层

Provider-Fetcher 架构:
1. Standard Models: 统一的数据模型 (NewsData, BarsQueryParams 等)
2. Provider Registry: 按数据类型选择 Fetcher
3. Errors: 带 HTTP 状态码的错误体系

TET Pipeline: Transform Query → Extract Data → Transform Data
"""
from .registry import get_registry, ProviderRegistry
from .models.news import NewsQueryParams, NewsData
from .models.bars import BarsQueryParams
from .errors import MarketDataError

__all__ = [
    # Registry
    "get_registry",
    "ProviderRegistry",
    # Models
    "NewsQueryParams",
    "NewsData",
    "BarsQueryParams",
    # Errors
    "MarketDataError",
]
