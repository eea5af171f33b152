"""
Alpaca 新闻 Fetcher

- transform_query: 构建 /v1beta1/news 请求（最新 N 条，按时间倒序）
- extract_data: 请求上游并解析 JSON
- transform_data: 校验 news 数组并映射为 NewsData
"""
from typing import Any, Dict, List

from ....errors import PayloadFormatError
from ....models.news import NewsQueryParams, NewsData, strip_pair_suffix
from .base import AlpacaFetcher


class AlpacaNewsFetcher(AlpacaFetcher):
    """Alpaca 新闻获取器"""

    PAYLOAD_KEY = "news"

    STATUS_LOG = "Alpaca News API error ({status}): {body}"
    STATUS_ERROR = "Failed to fetch news from the API: {status} - {body}"
    MALFORMED_LOG = "Failed to parse Alpaca News JSON response: {body}"
    MALFORMED_ERROR = "API returned malformed JSON: {excerpt}..."
    FORMAT_ERROR = "Alpaca News API response has no 'news' array or has an unexpected format."

    def transform_query(self, params: NewsQueryParams) -> Dict[str, Any]:
        query_params: Dict[str, Any] = {
            "sort": "desc",
            "limit": params.limit,
        }
        if params.symbol:
            query_params["symbols"] = strip_pair_suffix(params.symbol)

        return {
            "url": f"{self.base_url}/v1beta1/news",
            "params": query_params,
        }

    async def extract_data(self, query: Dict[str, Any]) -> Any:
        return await self._get_json(query["url"], query["params"])

    def transform_data(self, raw_data: Any, query: NewsQueryParams) -> List[NewsData]:
        items = self._require_list(raw_data)

        news = []
        for item in items:
            if not isinstance(item, dict):
                self.logger.error(f"Unexpected news item: {item!r}")
                raise PayloadFormatError(self.FORMAT_ERROR)
            news.append(NewsData.from_upstream(item, self.settings.DISPLAY_TIMEZONE))
        return news
