"""
测试公共夹具

上游 Alpaca 由 FakeSession 替代，所有测试不访问网络。
"""
from typing import Any, Dict, List, Optional, Union

import pytest
import requests

ALPACA_ENV_KEYS = ("ALPACA_API_KEY", "ALPACA_SECRET_KEY", "ALPACA_BASE_URL", "DISPLAY_TIMEZONE")


def make_response(status_code: int = 200, body: Union[bytes, str] = b"") -> requests.Response:
    """构造一个真实的 requests.Response"""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.encoding = "utf-8"
    return response


class FakeSession:
    """记录调用的 requests.Session 替身"""

    def __init__(
        self,
        response: Optional[requests.Response] = None,
        exc: Optional[Exception] = None,
    ):
        self.response = response if response is not None else make_response(200, b"{}")
        self.exc = exc
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({
            "url": url,
            "params": dict(params or {}),
            "headers": dict(headers or {}),
            "timeout": timeout,
        })
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """避免本机环境变量影响配置"""
    for key in ALPACA_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_settings():
    from cryptosignals.core.config import Settings

    def _make(**overrides):
        values = {"ALPACA_API_KEY": "test-key", "ALPACA_SECRET_KEY": "test-secret"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def alpaca_registry():
    from cryptosignals.financial.registry import ProviderRegistry
    from cryptosignals.financial.providers.alpaca import AlpacaProvider

    registry = ProviderRegistry()
    registry.register(AlpacaProvider())
    return registry


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def session_factory():
    return FakeSession
