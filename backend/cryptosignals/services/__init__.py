"""
服务模块
"""
from .market_data_service import MarketDataService
from .dashboard_service import DashboardService, dashboard_service

__all__ = [
    "MarketDataService",
    "DashboardService",
    "dashboard_service",
]
