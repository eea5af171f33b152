"""
Alpaca Markets Provider
"""
from typing import Dict, Type

from ..base import BaseProvider, BaseFetcher, ProviderInfo
from .fetchers.news import AlpacaNewsFetcher
from .fetchers.bars import AlpacaBarsFetcher


class AlpacaProvider(BaseProvider):
    """
    Alpaca 行情数据源

    支持的数据类型:
    - news: 最新新闻
    - bars: 加密货币 K 线
    """

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(name="alpaca")

    @property
    def fetchers(self) -> Dict[str, Type[BaseFetcher]]:
        return {
            "news": AlpacaNewsFetcher,
            "bars": AlpacaBarsFetcher,
        }
