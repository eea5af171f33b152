"""
CryptoSignals 核心配置模块
使用 Pydantic Settings 管理环境变量和配置
"""
from typing import Optional, List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    # 应用基础配置
    APP_NAME: str = "CryptoSignals"
    APP_VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=True)

    # 服务器配置
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # CORS 配置
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"]
    )

    # Alpaca 行情 API 配置（凭证只从环境读取，不接受请求参数）
    ALPACA_API_KEY: Optional[str] = Field(default=None)
    ALPACA_SECRET_KEY: Optional[str] = Field(default=None)
    ALPACA_BASE_URL: str = Field(default="https://data.paper-api.alpaca.markets")

    # 上游请求配置
    UPSTREAM_TIMEOUT: int = Field(default=30, description="上游请求超时（秒）")
    NEWS_LIMIT: int = Field(default=10, description="新闻接口单次返回条数")
    DISPLAY_TIMEZONE: str = Field(default="UTC", description="新闻日期展示时区")

    # 日志配置
    LOG_LEVEL: str = Field(default="INFO")

    @property
    def has_alpaca_credentials(self) -> bool:
        """API Key 与 Secret 是否都已配置"""
        return bool(self.ALPACA_API_KEY) and bool(self.ALPACA_SECRET_KEY)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_ignore_empty=True,
    )


# 全局配置实例
settings = Settings()


# 便捷访问函数
def get_settings() -> Settings:
    """获取配置实例（用于依赖注入）"""
    return settings
