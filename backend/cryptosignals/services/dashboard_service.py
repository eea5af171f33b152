"""
看板数据服务 - 市场概览、币种详情、情感分数 (mock) 与告警规则

这里的数据全部来自静态表或随机生成，不涉及真实行情。
"""
import logging
import random
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..financial.errors import UnknownCoinError

logger = logging.getLogger(__name__)


CRYPTO_OPTIONS = ["BTC/USDT", "ETH/USDT", "SOL/USDT", "XRP/USDT", "ADA/USDT"]

MOCK_MARKET_OVERVIEW = {
    "totalMarketCap": "2.5T",
    "volume24h": "150B",
    "btcDominance": "52.3%",
}

MOCK_COIN_DETAILS: Dict[str, Dict[str, str]] = {
    "BTC/USDT": {"price": "$68,500.23", "change24h": "+2.5%", "marketCap": "$1.35T"},
    "ETH/USDT": {"price": "$3,820.15", "change24h": "+1.8%", "marketCap": "$458B"},
    "SOL/USDT": {"price": "$155.78", "change24h": "-0.7%", "marketCap": "$68B"},
    "XRP/USDT": {"price": "$0.5234", "change24h": "+0.1%", "marketCap": "$28B"},
    "ADA/USDT": {"price": "$0.4210", "change24h": "-1.2%", "marketCap": "$15B"},
}

SENTIMENTS = ["positive", "neutral", "negative"]

# (名称, 下限, 区间宽度)
SENTIMENT_RANGES = [
    ("Positive", 50, 100),
    ("Neutral", 20, 50),
    ("Negative", 10, 100),
]

# 告警阈值
HIGH_VOLUME_THRESHOLD = 50000
LOW_MARKET_CAP_THRESHOLD = 100
CHANGE_24H_THRESHOLD = 2


def _to_number(value: Union[float, str, None]) -> Optional[float]:
    """空值或无法解析的输入视为未设置"""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _as_text(value: Union[float, str]) -> str:
    if isinstance(value, str):
        return value
    return str(int(value)) if float(value).is_integer() else str(value)


class AlertFilters(BaseModel):
    """看板上的智能过滤条件"""
    volume: Optional[float] = Field(default=None, description="最小成交量")
    volatility: Optional[float] = Field(default=None, description="波动率 %（不参与告警）")
    trend: Optional[Literal["up", "down"]] = Field(default=None, description="趋势")
    rsi: bool = False
    macd: bool = Field(default=False, description="不参与告警")
    vwap: bool = Field(default=False, description="不参与告警")
    ma_crossover: bool = False
    bollinger_band: bool = False
    stochastic: bool = False
    market_cap: Optional[float] = Field(default=None, description="市值（十亿）")
    change_24h: Optional[Union[float, str]] = Field(
        default=None,
        description="24h 涨跌幅 %，字符串按输入原样用于告警文案"
    )


class Alert(BaseModel):
    """一条告警"""
    id: str
    coin: str
    criteria: str
    active: bool = True


class SentimentPoint(BaseModel):
    name: str
    value: float


class SentimentData(BaseModel):
    """币种情感分数（随机生成）"""
    coin: str
    sentiment: str
    data: List[SentimentPoint]


class DashboardService:
    """看板数据服务"""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def list_coins(self) -> List[str]:
        return list(CRYPTO_OPTIONS)

    def get_market_overview(self) -> Dict[str, str]:
        return dict(MOCK_MARKET_OVERVIEW)

    def get_coin_details(self, coin: str) -> Dict[str, str]:
        details = MOCK_COIN_DETAILS.get(coin)
        if details is None:
            raise UnknownCoinError(f"unknown coin: {coin}")
        return dict(details)

    def get_sentiment(self, coin: str) -> SentimentData:
        """随机生成情感分数，非真实分析"""
        return SentimentData(
            coin=coin,
            sentiment=self._rng.choice(SENTIMENTS),
            data=[
                SentimentPoint(name=name, value=self._rng.random() * width + low)
                for name, low, width in SENTIMENT_RANGES
            ],
        )

    def evaluate_alerts(self, coin: str, filters: AlertFilters) -> List[Alert]:
        """
        按固定规则评估告警

        规则与币种绑定（mock 逻辑），波动率、MACD、VWAP 不参与评估。
        """
        alerts: List[Alert] = []

        if filters.volume and filters.volume > HIGH_VOLUME_THRESHOLD and coin == "BTC/USDT":
            alerts.append(Alert(id="btc-volume", coin="BTC/USDT", criteria="Volume Alto"))
        if filters.trend == "up" and coin == "ETH/USDT":
            alerts.append(Alert(id="eth-trend", coin="ETH/USDT", criteria="Tendência de Alta"))
        if filters.rsi and coin == "SOL/USDT":
            alerts.append(Alert(id="sol-rsi", coin="SOL/USDT", criteria="Sinal RSI"))
        if filters.ma_crossover and coin == "XRP/USDT":
            alerts.append(Alert(id="xrp-ma", coin="XRP/USDT", criteria="Crossover de MA"))
        if filters.bollinger_band and coin == "ADA/USDT":
            alerts.append(Alert(id="ada-bb", coin="ADA/USDT", criteria="Preço tocando BB"))
        if filters.stochastic and coin == "BTC/USDT":
            alerts.append(Alert(id="btc-stoch", coin="BTC/USDT", criteria="Estocástico Sobrecomprado"))
        if (
            filters.market_cap is not None
            and filters.market_cap < LOW_MARKET_CAP_THRESHOLD
            and coin == "SOL/USDT"
        ):
            alerts.append(
                Alert(id="sol-mcap", coin="SOL/USDT", criteria="Capitalização de Mercado Baixa")
            )

        details = MOCK_COIN_DETAILS.get(coin)
        change_24h = _to_number(filters.change_24h)
        if (
            change_24h is not None
            and change_24h > CHANGE_24H_THRESHOLD
            and details is not None
            and "+" in details["change24h"]
        ):
            alerts.append(
                Alert(
                    id=f"{coin}-change",
                    coin=coin,
                    criteria=f"Variação 24h > {_as_text(filters.change_24h)}%",
                )
            )

        return alerts

    @staticmethod
    def new_alerts(alerts: List[Alert], active_alerts: List[Alert]) -> List[Alert]:
        """本次新触发的告警（之前未处于激活状态）"""
        active_ids = {a.id for a in active_alerts if a.active}
        return [a for a in alerts if a.id not in active_ids]


# 全局实例
dashboard_service = DashboardService()
