"""
行情代理 API 路由

GET /api/market-data?type={news|bars}&symbol=...&timeframe=...&limit=...

响应:
- 200 {"news": [...]} / {"bars": [...]}
- 400 {"error": str}  参数非法
- 500 {"error": str}  凭证缺失或上游失败
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..core.config import Settings, get_settings
from ..financial.errors import ConfigurationError, InvalidRequestError
from ..services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_market_data_service(
    settings: Settings = Depends(get_settings),
) -> MarketDataService:
    """每个请求新建一个服务实例"""
    return MarketDataService(settings)


@router.get("")
async def get_market_data(
    data_type: Optional[str] = Query(None, alias="type", description="数据类型: news 或 bars"),
    symbol: Optional[str] = Query(None, description="币种，如 BTC/USDT；bars 必填"),
    timeframe: Optional[str] = Query(None, description="K 线周期，默认 1D"),
    limit: Optional[str] = Query(None, description="K 线条数，默认 100"),
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    代理 Alpaca 行情接口

    - **type=news**: 最新 10 条新闻，可按 symbol 过滤
    - **type=bars**: 加密货币 K 线，symbol 必填
    """
    try:
        return await service.get_market_data(data_type, symbol, timeframe, limit)

    except (ConfigurationError, InvalidRequestError) as e:
        logger.warning(f"Rejected market data request (type={data_type}): {e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message})

    except Exception as e:
        logger.error(f"Market data backend error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": f"Internal Server Error: {e}"},
        )
