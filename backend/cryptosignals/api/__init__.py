"""
API 模块
"""
from fastapi import APIRouter
from . import market_data, dashboard

# 创建主路由器
api_router = APIRouter()

# 注册子路由
api_router.include_router(market_data.router, prefix="/market-data", tags=["market-data"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])

__all__ = ["api_router"]
