"""
Alpaca 加密货币 K 线 Fetcher

bars 数组原样透传，只校验其存在。
"""
from typing import Any, Dict, List

from ....models.bars import BarsQueryParams, BarData
from ....models.news import strip_pair_suffix
from .base import AlpacaFetcher


class AlpacaBarsFetcher(AlpacaFetcher):
    """Alpaca 加密货币 K 线获取器"""

    PAYLOAD_KEY = "bars"

    STATUS_LOG = "Alpaca Bars API error ({status}): {body}"
    STATUS_ERROR = "Failed to fetch bars from Alpaca: {status} - {body}"
    MALFORMED_LOG = "Failed to parse Alpaca Bars JSON response. Response: {body}"
    MALFORMED_ERROR = "Alpaca Bars API returned malformed JSON: {excerpt}..."
    FORMAT_ERROR = (
        "Unexpected format. Check the documentation at "
        "https://docs.alpaca.markets/docs/websocket-streaming"
    )

    def transform_query(self, params: BarsQueryParams) -> Dict[str, Any]:
        symbol = strip_pair_suffix(params.symbol)
        return {
            "url": f"{self.base_url}/v2/crypto/{symbol}/bars",
            "params": {
                "timeframe": params.timeframe,
                "limit": params.limit,
            },
        }

    async def extract_data(self, query: Dict[str, Any]) -> Any:
        return await self._get_json(query["url"], query["params"])

    def transform_data(self, raw_data: Any, query: BarsQueryParams) -> List[BarData]:
        return self._require_list(raw_data)
