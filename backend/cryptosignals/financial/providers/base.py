"""
Provider & Fetcher 基础抽象

TET (Transform-Extract-Transform) Pipeline:
1. Transform Query: 将标准参数转换为 Provider 特定参数 (URL、查询串)
2. Extract Data: 执行实际的数据获取 (HTTP)
3. Transform Data: 将原始数据转换为标准模型
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Dict, Any, List, Type, Optional
from pydantic import BaseModel
from dataclasses import dataclass
import logging

# 泛型类型变量
QueryT = TypeVar("QueryT", bound=BaseModel)
DataT = TypeVar("DataT")


@dataclass
class ProviderInfo:
    """
    Provider 元信息

    Attributes:
        name: 唯一标识，如 'alpaca'
    """
    name: str


class BaseFetcher(ABC, Generic[QueryT, DataT]):
    """
    数据获取器基类 - 实现 TET Pipeline

    子类必须实现 transform_query, extract_data, transform_data 三个抽象方法

    Example:
        >>> class AlpacaNewsFetcher(BaseFetcher[NewsQueryParams, NewsData]):
        ...     def transform_query(self, params):
        ...         return {"url": "...", "params": {"limit": params.limit}}
        ...
        ...     async def extract_data(self, query):
        ...         return await self._get_json(query["url"], query["params"])
        ...
        ...     def transform_data(self, raw_data, query):
        ...         return [NewsData.from_upstream(item) for item in raw_data["news"]]
    """

    def __init__(self):
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @abstractmethod
    def transform_query(self, params: QueryT) -> Dict[str, Any]:
        """
        [T]ransform Query: 将标准参数转换为 Provider 特定参数

        Args:
            params: 标准查询参数

        Returns:
            Provider 特定的参数字典
        """
        pass

    @abstractmethod
    async def extract_data(self, query: Dict[str, Any]) -> Any:
        """
        [E]xtract Data: 执行实际的数据获取

        Args:
            query: transform_query 返回的参数字典

        Returns:
            原始数据 (任意格式，由 transform_data 处理)
        """
        pass

    @abstractmethod
    def transform_data(self, raw_data: Any, query: QueryT) -> List[DataT]:
        """
        [T]ransform Data: 校验并转换原始数据

        Args:
            raw_data: extract_data 返回的原始数据
            query: 原始查询参数

        Returns:
            标准数据列表
        """
        pass

    async def fetch(self, params: QueryT) -> List[DataT]:
        """
        完整的 TET 执行流程

        Raises:
            MarketDataError: 任何阶段失败时抛出，不做重试
        """
        self.logger.info(f"Fetching with params: {params.model_dump()}")

        # T: Transform Query
        query = self.transform_query(params)
        self.logger.debug(f"Transformed query: {query.get('url')}")

        # E: Extract Data
        raw = await self.extract_data(query)

        # T: Transform Data
        results = self.transform_data(raw, params)
        self.logger.info(f"Transformed to {len(results)} records")

        return results

    def close(self) -> None:
        """释放 Fetcher 持有的资源（默认无操作）"""
        pass


class BaseProvider(ABC):
    """
    Provider 基类 - 定义数据源能力

    每个 Provider 可以有多个 Fetcher，每个 Fetcher 对应一种数据类型。
    """

    @property
    @abstractmethod
    def info(self) -> ProviderInfo:
        """返回 Provider 元信息"""
        pass

    @property
    @abstractmethod
    def fetchers(self) -> Dict[str, Type[BaseFetcher]]:
        """
        返回支持的 Fetcher 映射

        Returns:
            格式: {data_type: FetcherClass}，例如 {'news': AlpacaNewsFetcher}
        """
        pass

    def get_fetcher(self, data_type: str, **fetcher_kwargs) -> Optional[BaseFetcher]:
        """
        获取指定类型的 Fetcher 实例（每次调用都新建，请求之间不共享状态）

        Args:
            data_type: 数据类型，如 'news', 'bars'
            **fetcher_kwargs: 传给 Fetcher 构造函数的参数 (配置、HTTP session 等)

        Returns:
            Fetcher 实例，如果不支持该类型则返回 None
        """
        fetcher_cls = self.fetchers.get(data_type)
        if fetcher_cls:
            return fetcher_cls(**fetcher_kwargs)
        return None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name='{self.info.name}' types={list(self.fetchers.keys())}>"
