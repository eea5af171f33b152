"""
Alpaca Fetcher 公共 HTTP 层

负责:
- 附加凭证请求头 (APCA-API-KEY-ID / APCA-API-SECRET-KEY)
- 在线程池中执行同步 requests 调用
- 非 2xx 状态处理
- 响应体"只读一次再解析": 先取原始字节，再解码为 JSON，
  解码失败与传输失败是两种不同的错误
"""
import asyncio
import json
from typing import Any, Dict, Optional

import requests

from ....errors import (
    MalformedPayloadError,
    PayloadFormatError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from ...base import BaseFetcher
from .....core.config import Settings

# 错误信息中保留的响应体长度
EXCERPT_LENGTH = 200


class AlpacaFetcher(BaseFetcher):
    """
    Alpaca Fetcher 基类

    子类通过类属性定义各自的错误文案和数据字段。
    """

    # 响应中承载数据的数组字段
    PAYLOAD_KEY: str = ""

    # 日志 / 错误文案
    STATUS_LOG = "Alpaca API error ({status}): {body}"
    STATUS_ERROR = "Failed to fetch data from the API: {status} - {body}"
    MALFORMED_LOG = "Failed to parse JSON response: {body}"
    MALFORMED_ERROR = "API returned malformed JSON: {excerpt}..."
    FORMAT_ERROR = "Unexpected response format."

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        super().__init__()
        self.settings = settings
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> requests.Session:
        """获取 requests Session (延迟初始化)"""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self) -> None:
        """只关闭自己创建的 session，外部注入的由调用方管理"""
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    @property
    def base_url(self) -> str:
        return self.settings.ALPACA_BASE_URL.rstrip("/")

    def _auth_headers(self) -> Dict[str, str]:
        """凭证请求头，只来自配置"""
        return {
            "APCA-API-KEY-ID": self.settings.ALPACA_API_KEY or "",
            "APCA-API-SECRET-KEY": self.settings.ALPACA_SECRET_KEY or "",
        }

    def _request_sync(self, url: str, params: Dict[str, Any]) -> requests.Response:
        """同步发起请求（在线程池中执行）"""
        try:
            return self._get_session().get(
                url,
                params=params,
                headers=self._auth_headers(),
                timeout=self.settings.UPSTREAM_TIMEOUT,
            )
        except requests.RequestException as e:
            self.logger.error(f"Request to {url} failed: {e}")
            raise UpstreamTransportError(f"Failed to reach upstream: {e}") from e

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        """
        发起 GET 请求并解析 JSON

        Raises:
            UpstreamTransportError: 网络异常
            UpstreamStatusError: 非 2xx
            MalformedPayloadError: 响应体不是合法 JSON
        """
        loop = asyncio.get_event_loop()
        response = await loop.run_in_executor(
            None,
            lambda: self._request_sync(url, params)
        )

        if not response.ok:
            error_text = response.text
            self.logger.error(self.STATUS_LOG.format(status=response.status_code, body=error_text))
            raise UpstreamStatusError(
                self.STATUS_ERROR.format(status=response.status_code, body=error_text),
                status=response.status_code,
                body=error_text,
            )

        # 响应体只读取一次
        raw = response.content
        return self._parse_json(raw)

    def _parse_json(self, raw: bytes) -> Any:
        """将原始字节解码为 JSON"""
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            text = raw.decode("utf-8", errors="replace")
            self.logger.error(self.MALFORMED_LOG.format(body=text))
            raise MalformedPayloadError(
                self.MALFORMED_ERROR.format(excerpt=text[:EXCERPT_LENGTH]),
                excerpt=text[:EXCERPT_LENGTH],
            ) from e

    def _require_list(self, data: Any) -> list:
        """校验响应中存在 PAYLOAD_KEY 数组"""
        items = data.get(self.PAYLOAD_KEY) if isinstance(data, dict) else None
        if not isinstance(items, list):
            self.logger.error(
                f"Response has no '{self.PAYLOAD_KEY}' array or has an unexpected format: {data!r}"
            )
            raise PayloadFormatError(self.FORMAT_ERROR)
        return items
