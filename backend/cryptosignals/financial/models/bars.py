"""
加密货币 K 线（Bar）查询模型

Bar 是单个时间区间的 OHLCV 聚合数据，对本系统不透明：
上游返回的 bars 数组原样透传，不做字段映射。
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List


class BarsQueryParams(BaseModel):
    """
    K 线查询参数

    Example:
        >>> params = BarsQueryParams(symbol="BTC/USDT", timeframe="1H", limit="50")
        >>> await fetcher.fetch(params)  # 返回上游 bars 列表
    """
    symbol: str = Field(..., min_length=1, description="币种，如 'BTC' 或 'BTC/USDT'")
    timeframe: str = Field(default="1D", description="K 线周期，如 '1Min', '1H', '1D'")
    limit: str = Field(default="100", description="返回条数，原样转发给上游")

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "BTC/USDT",
                "timeframe": "1D",
                "limit": "100"
            }
        }


# 上游定义的单条 Bar，原样透传
BarData = Dict[str, Any]


class BarsResponse(BaseModel):
    """bars 接口响应体"""
    bars: List[Any]
