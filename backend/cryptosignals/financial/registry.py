"""
Provider 注册中心

根据数据类型 (即请求中的 type 参数) 找到对应 Provider 并创建 Fetcher
"""
from typing import Dict, Optional, List
import logging

from .providers.base import BaseProvider, BaseFetcher

logger = logging.getLogger(__name__)


class FetcherNotFoundError(Exception):
    """Fetcher 未找到异常"""
    pass


class ProviderRegistry:
    """
    Provider 注册中心

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.register(AlpacaProvider())
        >>> fetcher = registry.get_fetcher("news", settings=settings)
    """

    def __init__(self):
        self._providers: Dict[str, BaseProvider] = {}
        # data_type -> Provider
        self._by_type: Dict[str, BaseProvider] = {}

    def register(self, provider: BaseProvider) -> None:
        """注册 Provider，同一数据类型后注册的覆盖先注册的"""
        self._providers[provider.info.name] = provider
        for data_type in provider.fetchers:
            self._by_type[data_type] = provider

        logger.info(
            f"Registered provider: {provider.info.name} "
            f"(types={list(provider.fetchers.keys())})"
        )

    def get_fetcher(self, data_type: str, **fetcher_kwargs) -> BaseFetcher:
        """
        获取 Fetcher

        Args:
            data_type: 数据类型，如 'news', 'bars'
            **fetcher_kwargs: 传给 Fetcher 构造函数的参数

        Raises:
            FetcherNotFoundError: 没有 Provider 支持该数据类型
        """
        provider = self._by_type.get(data_type)
        if provider is None:
            raise FetcherNotFoundError(f"No provider found for data_type='{data_type}'")

        logger.debug(f"Using {provider.info.name} for {data_type}")
        return provider.get_fetcher(data_type, **fetcher_kwargs)

    def list_providers(self) -> List[str]:
        """列出所有已注册的 Provider 名称 (按注册顺序)"""
        return list(self._providers)

    def __repr__(self) -> str:
        return f"<ProviderRegistry types={list(self._by_type.keys())}>"


# 全局实例
_registry: Optional[ProviderRegistry] = None


def get_registry() -> ProviderRegistry:
    """
    获取全局 Registry 实例，首次调用时注册 AlpacaProvider
    """
    global _registry
    if _registry is None:
        from .providers.alpaca import AlpacaProvider

        _registry = ProviderRegistry()
        _registry.register(AlpacaProvider())
    return _registry
