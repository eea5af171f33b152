"""
Alpaca Markets Provider

提供:
- 新闻数据 (news): AlpacaNewsFetcher
- 加密货币 K 线 (bars): AlpacaBarsFetcher
"""
from .provider import AlpacaProvider

__all__ = ["AlpacaProvider"]
