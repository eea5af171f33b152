"""
CryptoSignals 主应用入口
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .api import api_router
from .financial.errors import MarketDataError
from .financial.registry import get_registry

# 配置日志
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info("=== CryptoSignals Starting ===")
    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"Upstream: {settings.ALPACA_BASE_URL}")
    logger.info(f"Providers: {get_registry().list_providers()}")

    # 凭证缺失不阻止启动，每个请求单独返回 500
    if not settings.has_alpaca_credentials:
        logger.warning("⚠️ ALPACA_API_KEY / ALPACA_SECRET_KEY not set, market data requests will fail")

    yield

    logger.info("=== CryptoSignals Shutting Down ===")


# 创建 FastAPI 应用
app = FastAPI(
    title=settings.APP_NAME,
    description="Crypto signals dashboard backend: Alpaca market-data proxy and mock dashboard data",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# 配置 CORS
if settings.DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # 开发环境允许所有来源
        allow_credentials=False,  # 允许所有来源时必须为 False
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(MarketDataError)
async def market_data_exception_handler(request: Request, exc: MarketDataError):
    logger.warning(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# 全局异常处理
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": f"Internal Server Error: {exc}" if settings.DEBUG else "Internal Server Error"}
    )


# 根路由
@app.get("/")
async def root():
    """根路由 - 系统信息"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "active",
        "docs_url": "/docs",
        "api_prefix": settings.API_PREFIX,
    }


# 健康检查
@app.get("/health")
async def health_check():
    """健康检查端点"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "credentials_configured": settings.has_alpaca_credentials,
    }


# 注册 API 路由
app.include_router(api_router, prefix=settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cryptosignals.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
