"""
看板 mock 数据 API 路由
提供市场概览、币种详情、情感分数与告警评估
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..services.dashboard_service import (
    Alert,
    AlertFilters,
    DashboardService,
    SentimentData,
    dashboard_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_dashboard_service() -> DashboardService:
    return dashboard_service


# ============ Pydantic 模型 ============

class MarketOverview(BaseModel):
    """市场概览"""
    totalMarketCap: str
    volume24h: str
    btcDominance: str


class CoinDetails(BaseModel):
    """币种详情"""
    price: str
    change24h: str
    marketCap: str


class AlertCheckRequest(BaseModel):
    """告警评估请求"""
    coin: str = Field(..., description="当前选中的币种，如 BTC/USDT")
    filters: AlertFilters = Field(default_factory=AlertFilters)
    active_alerts: List[Alert] = Field(
        default_factory=list,
        description="上一轮评估后的激活告警"
    )


class AlertCheckResponse(BaseModel):
    """告警评估结果"""
    alerts: List[Alert]
    new_alerts: List[Alert]


# ============ API 端点 ============

@router.get("/coins", response_model=List[str])
async def list_coins(service: DashboardService = Depends(get_dashboard_service)):
    """可选币种列表"""
    return service.list_coins()


@router.get("/overview", response_model=MarketOverview)
async def get_market_overview(service: DashboardService = Depends(get_dashboard_service)):
    """市场概览（mock）"""
    return service.get_market_overview()


@router.get("/coin", response_model=CoinDetails)
async def get_coin_details(
    symbol: str = Query(..., description="币种，如 BTC/USDT"),
    service: DashboardService = Depends(get_dashboard_service),
):
    """币种价格、24h 涨跌与市值（mock）"""
    return service.get_coin_details(symbol)


@router.get("/sentiment", response_model=SentimentData)
async def get_sentiment(
    coin: str = Query("BTC/USDT", description="币种"),
    service: DashboardService = Depends(get_dashboard_service),
):
    """市场情感分数（随机生成）"""
    return service.get_sentiment(coin)


@router.post("/alerts/check", response_model=AlertCheckResponse)
async def check_alerts(
    request: AlertCheckRequest,
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    评估告警

    - **alerts**: 当前满足条件的全部告警，前端用它替换激活列表
    - **new_alerts**: 其中新触发的告警，前端据此弹出提示
    """
    alerts = service.evaluate_alerts(request.coin, request.filters)
    new_alerts = service.new_alerts(alerts, request.active_alerts)
    if new_alerts:
        logger.info(f"{len(new_alerts)} new alert(s) for {request.coin}: {[a.id for a in new_alerts]}")
    return AlertCheckResponse(alerts=alerts, new_alerts=new_alerts)
