"""
行情数据标准模型

- QueryParams: 定义标准输入参数
- Data: 定义标准输出字段
"""
from .news import NewsQueryParams, NewsData, NewsResponse, strip_pair_suffix
from .bars import BarsQueryParams, BarData, BarsResponse

__all__ = [
    "NewsQueryParams",
    "NewsData",
    "NewsResponse",
    "strip_pair_suffix",
    "BarsQueryParams",
    "BarData",
    "BarsResponse",
]
