"""
行情代理服务 - 校验请求、调用 Fetcher、组装响应体

检查顺序:
1. 凭证是否配置 (ConfigurationError)
2. type 是否合法 (InvalidRequestError)
3. bars 是否提供 symbol (InvalidRequestError)

前三步失败时不会发起任何上游请求。
"""
import logging
from typing import Any, Callable, Dict, Optional

import requests
from pydantic import BaseModel

from ..core.config import Settings
from ..financial.errors import ConfigurationError, InvalidRequestError
from ..financial.models.bars import BarsQueryParams, BarsResponse
from ..financial.models.news import NewsQueryParams, NewsResponse
from ..financial.registry import ProviderRegistry, get_registry

logger = logging.getLogger(__name__)

DEFAULT_TIMEFRAME = "1D"
DEFAULT_BARS_LIMIT = "100"


class MarketDataService:
    """行情代理服务，每个请求一个实例，不持有跨请求状态"""

    def __init__(
        self,
        settings: Settings,
        registry: Optional[ProviderRegistry] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings
        self.registry = registry or get_registry()
        self._session = session
        self._param_builders: Dict[str, Callable[..., BaseModel]] = {
            "news": self._news_params,
            "bars": self._bars_params,
        }

    def _check_credentials(self) -> None:
        if not self.settings.has_alpaca_credentials:
            raise ConfigurationError("API keys are not configured.")

    def _news_params(
        self,
        symbol: Optional[str],
        timeframe: Optional[str],
        limit: Optional[str],
    ) -> NewsQueryParams:
        return NewsQueryParams(symbol=symbol or None, limit=self.settings.NEWS_LIMIT)

    def _bars_params(
        self,
        symbol: Optional[str],
        timeframe: Optional[str],
        limit: Optional[str],
    ) -> BarsQueryParams:
        if not symbol:
            raise InvalidRequestError("symbol is required for bars.")
        return BarsQueryParams(
            symbol=symbol,
            timeframe=timeframe or DEFAULT_TIMEFRAME,
            limit=limit or DEFAULT_BARS_LIMIT,
        )

    async def get_market_data(
        self,
        data_type: Optional[str],
        symbol: Optional[str] = None,
        timeframe: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        处理一次行情代理请求

        Args:
            data_type: 'news' 或 'bars'
            symbol: 币种，news 可选，bars 必填
            timeframe: K 线周期（仅 bars）
            limit: K 线条数（仅 bars）

        Returns:
            {"news": [...]} 或 {"bars": [...]}

        Raises:
            MarketDataError: 任何失败，由路由层统一转换
        """
        self._check_credentials()

        builder = self._param_builders.get(data_type or "")
        if builder is None:
            raise InvalidRequestError("invalid API type specified.")
        params = builder(symbol, timeframe, limit)

        fetcher = self.registry.get_fetcher(
            data_type,
            settings=self.settings,
            session=self._session,
        )
        try:
            results = await fetcher.fetch(params)
        finally:
            fetcher.close()

        if data_type == "news":
            return NewsResponse(news=results).model_dump()
        return BarsResponse(bars=results).model_dump()
