"""
行情代理错误体系

每种错误都带有对应的 HTTP 状态码，由路由层统一转换为 {"error": str} 响应:
- ConfigurationError: 凭证缺失 (500)
- InvalidRequestError: 请求参数非法 (400)，不会发起上游请求
- UpstreamError: 上游相关错误 (500)
    ├── UpstreamStatusError: 上游返回非 2xx
    ├── UpstreamTransportError: 上游不可达 / 网络异常
    └── UpstreamPayloadError: 上游响应体不可用
        ├── MalformedPayloadError: 不是合法 JSON
        └── PayloadFormatError: 合法 JSON 但缺少预期数组
"""
from typing import Optional


class MarketDataError(Exception):
    """行情代理错误基类"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(MarketDataError):
    """凭证未配置"""
    status_code = 500


class InvalidRequestError(MarketDataError):
    """请求参数非法"""
    status_code = 400


class UnknownCoinError(MarketDataError):
    """看板 mock 表中不存在的币种"""
    status_code = 404


class UpstreamError(MarketDataError):
    """上游错误基类"""
    status_code = 500


class UpstreamStatusError(UpstreamError):
    """上游返回非成功状态码"""

    def __init__(self, message: str, status: int, body: str):
        super().__init__(message)
        self.status = status
        self.body = body


class UpstreamTransportError(UpstreamError):
    """上游不可达（连接失败、超时等）"""


class UpstreamPayloadError(UpstreamError):
    """上游响应体无法使用"""


class MalformedPayloadError(UpstreamPayloadError):
    """响应体不是合法 JSON"""

    def __init__(self, message: str, excerpt: Optional[str] = None):
        super().__init__(message)
        self.excerpt = excerpt


class PayloadFormatError(UpstreamPayloadError):
    """响应体缺少预期的数组字段"""
