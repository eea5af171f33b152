"""
加密货币新闻标准模型

- NewsQueryParams: 新闻查询参数标准模型
- NewsData: 归一化后的新闻条目

上游字段与标准字段的映射:
    headline   → title
    created_at → date (dd/mm/yyyy，巴西葡语习惯的日/月/年顺序)
    symbols    → symbols (缺失时为空列表)
"""
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional, List, Any
from zoneinfo import ZoneInfo


USDT_SUFFIX = "/USDT"

# pt-BR toLocaleDateString 的日期顺序
DISPLAY_DATE_FORMAT = "%d/%m/%Y"


def strip_pair_suffix(symbol: str) -> str:
    """去掉交易对后缀 "/USDT"，上游加密货币接口只接受基础币种形式"""
    return symbol.removesuffix(USDT_SUFFIX)


class NewsQueryParams(BaseModel):
    """
    新闻查询参数标准模型

    Example:
        >>> params = NewsQueryParams(symbol="BTC/USDT")
        >>> await fetcher.fetch(params)  # 返回 List[NewsData]
    """
    symbol: Optional[str] = Field(
        default=None,
        description="币种过滤，如 'BTC' 或 'BTC/USDT'"
    )
    limit: int = Field(
        default=10,
        ge=1,
        le=50,
        description="返回条数上限"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "BTC/USDT",
                "limit": 10
            }
        }


class NewsData(BaseModel):
    """
    新闻数据标准模型

    与上游字段名解耦，前端只依赖此结构。
    """
    title: Optional[str] = Field(default=None, description="新闻标题")
    source: Optional[str] = Field(default=None, description="来源，如 'benzinga'")
    date: str = Field(..., description="本地化日期字符串 dd/mm/yyyy")
    url: Optional[str] = Field(default=None, description="原文链接")
    symbols: List[Any] = Field(
        default_factory=list,
        description="关联币种/股票代码，元素原样透传"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Bitcoin tops $68k",
                "source": "benzinga",
                "date": "02/01/2024",
                "url": "https://www.benzinga.com/...",
                "symbols": ["BTCUSD"]
            }
        }

    @staticmethod
    def format_date(created_at: Any, tz_name: str = "UTC") -> str:
        """
        将 ISO 时间戳转换为展示时区下的 dd/mm/yyyy

        无法解析时返回空字符串；不带时区的时间戳按 UTC 处理。
        """
        if not isinstance(created_at, str) or not created_at:
            return ""
        try:
            # 兼容 "Z" 结尾
            parsed = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        except ValueError:
            return ""
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        tz = timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)
        return parsed.astimezone(tz).strftime(DISPLAY_DATE_FORMAT)

    @classmethod
    def from_upstream(cls, item: dict, tz_name: str = "UTC") -> "NewsData":
        """将一条 Alpaca 新闻转换为标准模型"""
        return cls(
            title=item.get("headline"),
            source=item.get("source"),
            date=cls.format_date(item.get("created_at"), tz_name),
            url=item.get("url"),
            symbols=item.get("symbols") or [],
        )


class NewsResponse(BaseModel):
    """news 接口响应体"""
    news: List[NewsData]
