"""
test_fetch.py - Data Fetch Facade 테스트

테스트 케이스:
- TC1: 스토어에 키가 있으면 네트워크 호출 없음 (플랫폼 무관)
- TC2: 서버에서 성공 → 스토어 기록, 같은 pass의 두 번째 읽기는 호출 1회 유지
- TC3: 브라우저에서 성공 → 스토어 기록 안 함
- TC4: 실패 → fallback, 스토어 기록 안 함, 예외 전파 안 함
- TC5: 예상 밖 예외는 전파
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from src.core.context import RenderContext, create_server_context
from src.core.fetch import fetch_with_cache
from src.core.logging import create_render_log
from src.core.transfer_state import TransferState
from src.domain.schemas import FetchSource, Platform

from tests.conftest import API_BASE, MockBackend


def browser_context(http: httpx.AsyncClient, state: TransferState | None = None) -> RenderContext:
    return RenderContext(
        platform=Platform.BROWSER,
        state=state or TransferState(),
        http=http,
        api_base_url=API_BASE,
        render_log=create_render_log("http://localhost/products", Platform.BROWSER),
    )


# =============================================================================
# TC1: cached
# =============================================================================


class TestCachedRead:
    """스토어 우선 읽기."""

    @pytest.mark.asyncio
    async def test_server_cached_skips_network(self, mock_backend: MockBackend, http_client):
        context = create_server_context(http_client, API_BASE, "http://localhost/products")
        context.state.set("products", [{"id": 9}])

        result = await fetch_with_cache(context, "products", "/products", [])

        assert result.source is FetchSource.CACHED
        assert result.is_cached
        assert result.value == [{"id": 9}]
        assert mock_backend.total_calls == 0

    @pytest.mark.asyncio
    async def test_browser_cached_skips_network(self, mock_backend: MockBackend, http_client):
        state = TransferState({"products": [{"id": 9}]})
        context = browser_context(http_client, state)

        result = await fetch_with_cache(context, "products", "/products", [])

        assert result.is_cached
        assert mock_backend.total_calls == 0


# =============================================================================
# TC2: server live
# =============================================================================


class TestServerLive:
    """서버 측 live fetch."""

    @pytest.mark.asyncio
    async def test_writes_to_store(self, mock_backend: MockBackend, http_client):
        context = create_server_context(http_client, API_BASE, "http://localhost/products")

        result = await fetch_with_cache(context, "products", "/products", [])

        assert result.is_live
        assert len(result.value) == 6
        assert context.state.get("products", []) == result.value
        assert mock_backend.calls["/api/products"] == 1

    @pytest.mark.asyncio
    async def test_second_read_same_pass_fetches_once(self, mock_backend: MockBackend, http_client):
        """같은 pass에서 두 번 읽어도 네트워크 호출은 1회."""
        context = create_server_context(http_client, API_BASE, "http://localhost/products")

        first = await fetch_with_cache(context, "products", "/products", [])
        second = await fetch_with_cache(context, "products", "/products", [])

        assert first.value == second.value
        assert first.is_live
        assert second.is_cached
        assert mock_backend.calls["/api/products"] == 1

    @pytest.mark.asyncio
    async def test_render_log_records_events(self, http_client):
        context = create_server_context(http_client, API_BASE, "http://localhost/products")

        await fetch_with_cache(context, "products", "/products", [])
        await fetch_with_cache(context, "products", "/products", [])

        sources = [f.source for f in context.render_log.fetches]
        assert sources == ["live", "cached"]
        assert context.render_log.network_calls == 1


# =============================================================================
# TC3: browser live
# =============================================================================


class TestBrowserLive:
    """브라우저 측 live fetch."""

    @pytest.mark.asyncio
    async def test_does_not_write_to_store(self, mock_backend: MockBackend, http_client):
        context = browser_context(http_client)

        result = await fetch_with_cache(context, "products", "/products", [])

        assert result.is_live
        assert len(result.value) == 6
        assert not context.state.has_key("products")
        assert mock_backend.calls["/api/products"] == 1


# =============================================================================
# TC4: failure → fallback
# =============================================================================


class TestFailure:
    """실패 시 fallback."""

    @pytest.mark.asyncio
    async def test_error_status_returns_fallback(self):
        backend = MockBackend(fail_paths=("/api/products",))
        context = create_server_context(backend.client(), API_BASE, "http://localhost/products")
        fallback: list = []

        result = await fetch_with_cache(context, "products", "/products", fallback)

        assert result.is_fallback
        assert result.value is fallback
        assert not context.state.has_key("products")

    @pytest.mark.asyncio
    async def test_connection_error_returns_fallback(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
        context = create_server_context(http, API_BASE, "http://localhost/products")

        result = await fetch_with_cache(context, "products", "/products", [])

        assert result.value == []
        assert result.is_fallback

    @pytest.mark.asyncio
    async def test_invalid_json_returns_fallback(self):
        def not_json(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        http = httpx.AsyncClient(transport=httpx.MockTransport(not_json))
        context = create_server_context(http, API_BASE, "http://localhost/products")

        result = await fetch_with_cache(context, "products", "/products", [])

        assert result.value == []
        assert context.state.is_empty

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            b'[{"id": 1, "price": NaN}]',
            b'[{"id": 1, "price": Infinity}]',
            b'{"value": -Infinity}',
            b'[{"id": 1, "price": 1e999}]',
        ],
    )
    async def test_unstorable_payload_returns_fallback(self, body):
        """디코딩은 되지만 저장할 수 없는 값 → fallback (렌더 실패 아님)."""

        def non_standard(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, content=body, headers={"content-type": "application/json"}
            )

        http = httpx.AsyncClient(transport=httpx.MockTransport(non_standard))
        context = create_server_context(http, API_BASE, "http://localhost/products")

        result = await fetch_with_cache(context, "products", "/products", [])

        assert result.is_fallback
        assert result.value == []
        assert context.state.is_empty
        assert context.render_log.fetches[0].error_code == "FETCH_FAILED"

    @pytest.mark.asyncio
    async def test_unstorable_payload_in_browser_returns_fallback(self):
        def non_standard(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b'{"score": NaN}')

        context = browser_context(httpx.AsyncClient(transport=httpx.MockTransport(non_standard)))

        result = await fetch_with_cache(context, "about", "/about", {})

        assert result.is_fallback

    @pytest.mark.asyncio
    async def test_failed_check_returns_fallback(self):
        """형태 검사 실패 → 저장하지 않고 fallback."""
        backend = MockBackend(products={"items": []})  # type: ignore[arg-type]
        context = create_server_context(backend.client(), API_BASE, "http://localhost/products")

        result = await fetch_with_cache(
            context, "products", "/products", [], check=lambda value: isinstance(value, list)
        )

        assert result.is_fallback
        assert result.value == []
        assert context.state.is_empty

    @pytest.mark.asyncio
    async def test_passing_check_stores_value(self, mock_backend: MockBackend, http_client):
        context = create_server_context(http_client, API_BASE, "http://localhost/products")

        result = await fetch_with_cache(
            context, "products", "/products", [], check=lambda value: isinstance(value, list)
        )

        assert result.is_live
        assert context.state.has_key("products")

    @pytest.mark.asyncio
    async def test_failure_logged(self, caplog):
        backend = MockBackend(fail_paths=("/api/about",))
        context = create_server_context(backend.client(), API_BASE, "http://localhost/about")

        with caplog.at_level("WARNING", logger="src.core.fetch"):
            await fetch_with_cache(context, "about", "/about", {})

        assert "FETCH_FAILED" in caplog.text
        event = context.render_log.fetches[0]
        assert event.source == "fallback"
        assert event.error_code == "FETCH_FAILED"

    @pytest.mark.asyncio
    async def test_failure_not_cached_next_read_retries_network(self):
        """실패는 스토어에 남지 않으므로 다음 읽기는 다시 호출."""
        backend = MockBackend(fail_paths=("/api/products",))
        context = create_server_context(backend.client(), API_BASE, "http://localhost/products")

        await fetch_with_cache(context, "products", "/products", [])
        await fetch_with_cache(context, "products", "/products", [])

        assert backend.calls["/api/products"] == 2


# =============================================================================
# TC5: unexpected exceptions
# =============================================================================


class TestUnexpectedError:
    """facade가 처리하지 않는 예외."""

    @pytest.mark.asyncio
    async def test_unexpected_exception_propagates(self):
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.side_effect = RuntimeError("boom")
        context = create_server_context(http, API_BASE, "http://localhost/products")

        with pytest.raises(RuntimeError, match="boom"):
            await fetch_with_cache(context, "products", "/products", [])
