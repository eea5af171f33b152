"""
冒烟测试: Alpaca Fetcher

验证:
- transform_query 构建的 URL / 参数 / 凭证头
- 非 2xx、非法 JSON、缺少数组字段时的错误类型与文案
- news 字段映射、bars 原样透传
- Session 所有权 (只关闭自己创建的)

运行:
    pytest -q -k "smoke_alpaca_fetchers"
"""
import json

import pytest
import requests


BASE_URL = "https://data.paper-api.alpaca.markets"


class TestNewsFetcherQuery:
    """测试新闻 Fetcher 的 Transform Query"""

    def test_news_query_without_symbol(self, settings):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams

        query = AlpacaNewsFetcher(settings).transform_query(NewsQueryParams())

        assert query["url"] == f"{BASE_URL}/v1beta1/news"
        assert query["params"] == {"sort": "desc", "limit": 10}

    def test_news_query_strips_suffix(self, settings):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams

        query = AlpacaNewsFetcher(settings).transform_query(NewsQueryParams(symbol="BTC/USDT"))
        assert query["params"]["symbols"] == "BTC"

    def test_base_url_from_settings(self, make_settings):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams

        settings = make_settings(ALPACA_BASE_URL="http://localhost:9999/")
        query = AlpacaNewsFetcher(settings).transform_query(NewsQueryParams())
        assert query["url"] == "http://localhost:9999/v1beta1/news"


class TestBarsFetcherQuery:
    """测试 K 线 Fetcher 的 Transform Query"""

    def test_bars_query_path_uses_base_asset(self, settings):
        from cryptosignals.financial.providers.alpaca.fetchers.bars import AlpacaBarsFetcher
        from cryptosignals.financial.models.bars import BarsQueryParams

        query = AlpacaBarsFetcher(settings).transform_query(
            BarsQueryParams(symbol="BTC/USDT", timeframe="1H", limit="50")
        )

        assert query["url"] == f"{BASE_URL}/v2/crypto/BTC/bars"
        assert query["params"] == {"timeframe": "1H", "limit": "50"}


class TestNewsFetcherPipeline:
    """测试新闻 Fetcher 完整 TET Pipeline"""

    @pytest.mark.asyncio
    async def test_fetch_news(self, settings, session_factory, response_factory):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams, NewsData

        body = {
            "news": [
                {
                    "headline": "H",
                    "source": "S",
                    "created_at": "2024-01-02T00:00:00Z",
                    "url": "u",
                    "symbols": ["BTC"],
                },
                {"headline": "H2", "source": "S2", "created_at": "2024-02-10T12:00:00Z", "url": "u2"},
            ],
            "next_page_token": None,
        }
        session = session_factory(response_factory(200, json.dumps(body)))
        fetcher = AlpacaNewsFetcher(settings, session=session)

        results = await fetcher.fetch(NewsQueryParams(symbol="ETH/USDT"))

        assert all(isinstance(r, NewsData) for r in results)
        assert [r.title for r in results] == ["H", "H2"]
        assert results[1].date == "10/02/2024"
        assert results[1].symbols == []

        assert len(session.calls) == 1
        call = session.calls[0]
        assert call["params"]["symbols"] == "ETH"
        assert call["headers"] == {
            "APCA-API-KEY-ID": "test-key",
            "APCA-API-SECRET-KEY": "test-secret",
        }
        assert call["timeout"] == 30

    @pytest.mark.asyncio
    async def test_non_success_status(self, settings, session_factory, response_factory):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams
        from cryptosignals.financial.errors import UpstreamStatusError

        session = session_factory(response_factory(429, "rate limit exceeded"))
        fetcher = AlpacaNewsFetcher(settings, session=session)

        with pytest.raises(UpstreamStatusError) as exc_info:
            await fetcher.fetch(NewsQueryParams())

        assert exc_info.value.status == 429
        assert exc_info.value.body == "rate limit exceeded"
        assert str(exc_info.value) == "Failed to fetch news from the API: 429 - rate limit exceeded"

    @pytest.mark.asyncio
    async def test_malformed_json(self, settings, session_factory, response_factory):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams
        from cryptosignals.financial.errors import MalformedPayloadError

        raw = "<html>" + "x" * 300
        session = session_factory(response_factory(200, raw))
        fetcher = AlpacaNewsFetcher(settings, session=session)

        with pytest.raises(MalformedPayloadError) as exc_info:
            await fetcher.fetch(NewsQueryParams())

        assert exc_info.value.excerpt == raw[:200]
        assert str(exc_info.value) == f"API returned malformed JSON: {raw[:200]}..."

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_malformed(self, settings, session_factory, response_factory):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams
        from cryptosignals.financial.errors import MalformedPayloadError

        session = session_factory(response_factory(200, b"\xff\xfe{"))
        fetcher = AlpacaNewsFetcher(settings, session=session)

        with pytest.raises(MalformedPayloadError):
            await fetcher.fetch(NewsQueryParams())

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ['{"items": []}', '{"news": "nope"}', "[]", "null"])
    async def test_missing_news_array(self, settings, session_factory, response_factory, body):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams
        from cryptosignals.financial.errors import PayloadFormatError

        session = session_factory(response_factory(200, body))
        fetcher = AlpacaNewsFetcher(settings, session=session)

        with pytest.raises(PayloadFormatError) as exc_info:
            await fetcher.fetch(NewsQueryParams())

        assert "unexpected format" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error(self, settings, session_factory):
        from cryptosignals.financial.providers.alpaca.fetchers.news import AlpacaNewsFetcher
        from cryptosignals.financial.models.news import NewsQueryParams
        from cryptosignals.financial.errors import UpstreamTransportError

        session = session_factory(exc=requests.ConnectionError("connection refused"))
        fetcher = AlpacaNewsFetcher(settings, session=session)

        with pytest.raises(UpstreamTransportError) as exc_info:
            await fetcher.fetch(NewsQueryParams())

        assert "connection refused" in str(exc_info.value)


class TestBarsFetcherPipeline:
    """测试 K 线 Fetcher 完整 TET Pipeline"""

    @pytest.mark.asyncio
    async def test_bars_passed_through(self, settings, session_factory, response_factory):
        from cryptosignals.financial.providers.alpaca.fetchers.bars import AlpacaBarsFetcher
        from cryptosignals.financial.models.bars import BarsQueryParams

        bars = [
            {"t": "2024-01-01T00:00:00Z", "o": 42000.5, "h": 43000, "l": 41500, "c": 42800.1, "v": 12.3},
            {"t": "2024-01-02T00:00:00Z", "o": 42800.1, "h": 44000, "l": 42500, "c": 43900, "v": 9.8, "extra": [1]},
        ]
        session = session_factory(response_factory(200, json.dumps({"bars": bars, "symbol": "BTC"})))
        fetcher = AlpacaBarsFetcher(settings, session=session)

        results = await fetcher.fetch(BarsQueryParams(symbol="BTC/USDT"))

        assert results == bars
        assert session.calls[0]["url"] == f"{BASE_URL}/v2/crypto/BTC/bars"

    @pytest.mark.asyncio
    async def test_bars_error_texts(self, settings, session_factory, response_factory):
        from cryptosignals.financial.providers.alpaca.fetchers.bars import AlpacaBarsFetcher
        from cryptosignals.financial.models.bars import BarsQueryParams
        from cryptosignals.financial.errors import (
            UpstreamStatusError,
            MalformedPayloadError,
            PayloadFormatError,
        )

        params = BarsQueryParams(symbol="BTC")

        fetcher = AlpacaBarsFetcher(settings, session=session_factory(response_factory(403, "forbidden")))
        with pytest.raises(UpstreamStatusError, match="Failed to fetch bars from Alpaca: 403 - forbidden"):
            await fetcher.fetch(params)

        fetcher = AlpacaBarsFetcher(settings, session=session_factory(response_factory(200, "oops")))
        with pytest.raises(MalformedPayloadError, match="Alpaca Bars API returned malformed JSON: oops"):
            await fetcher.fetch(params)

        fetcher = AlpacaBarsFetcher(settings, session=session_factory(response_factory(200, '{"bars": {}}')))
        with pytest.raises(PayloadFormatError, match="Unexpected format"):
            await fetcher.fetch(params)


class TestSessionOwnership:
    """测试 Session 生命周期"""

    def test_injected_session_not_closed(self, settings, session_factory):
        from cryptosignals.financial.providers.alpaca.fetchers.bars import AlpacaBarsFetcher

        session = session_factory()
        fetcher = AlpacaBarsFetcher(settings, session=session)
        fetcher.close()

        assert session.closed is False

    def test_own_session_closed(self, settings):
        from cryptosignals.financial.providers.alpaca.fetchers.bars import AlpacaBarsFetcher

        fetcher = AlpacaBarsFetcher(settings)
        session = fetcher._get_session()
        assert isinstance(session, requests.Session)

        fetcher.close()
        assert fetcher._session is None
