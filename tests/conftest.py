"""
Pytest fixtures for the gateway tests.

구성:
- 네트워크 호출 수를 세는 mock backend (httpx.MockTransport)
- 임시 browser 에셋 루트 + 테스트용 설정
"""

from collections import Counter
from collections.abc import Generator
from pathlib import Path
from typing import Any

import httpx
import pytest

from src.app.config import GatewaySettings
from src.app.routes.api import MOCK_PRODUCTS

API_BASE = "http://backend.test/api"

SHELL_HTML = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"><title>Shell</title></head>
<body>
    <app-root></app-root>
    <script src="main.js" type="module"></script>
</body>
</html>
"""


# =============================================================================
# Mock Backend
# =============================================================================


class MockBackend:
    """
    JSON 백엔드 흉내.

    calls: 경로별 호출 횟수 (예: calls["/api/products"])
    urls: 호출된 전체 URL (순서대로)
    fail_paths: 503을 돌려줄 경로
    """

    def __init__(
        self,
        products: list[dict[str, Any]] | None = None,
        fail_paths: tuple[str, ...] = (),
    ) -> None:
        self.products = MOCK_PRODUCTS if products is None else products
        self.fail_paths = set(fail_paths)
        self.calls: Counter[str] = Counter()
        self.urls: list[str] = []

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls[path] += 1
        self.urls.append(str(request.url))

        if path in self.fail_paths:
            return httpx.Response(503, json={"error": "unavailable"})
        if path.endswith("/products"):
            return httpx.Response(200, json=self.products)
        if path.endswith("/about"):
            return httpx.Response(
                200,
                json={
                    "title": "About Hybrid SSR Demo",
                    "content": "Mock about content.",
                    "lastUpdated": "2024-01-15T00:00:00+00:00",
                },
            )
        return httpx.Response(404, json={"detail": "Not Found"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def mock_backend() -> MockBackend:
    """정상 응답 백엔드."""
    return MockBackend()


@pytest.fixture
def http_client(mock_backend: MockBackend) -> httpx.AsyncClient:
    """mock backend에 연결된 AsyncClient."""
    return mock_backend.client()


# =============================================================================
# Path / Config Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def browser_dist(tmp_path: Path) -> Generator[Path, None, None]:
    """
    임시 browser 에셋 루트.

    포함:
    - index.csr.html (CSR 셸)
    - main.js, styles.css
    """
    root = tmp_path / "browser"
    root.mkdir()
    (root / "index.csr.html").write_text(SHELL_HTML, encoding="utf-8")
    (root / "main.js").write_text("console.log('boot');\n", encoding="utf-8")
    (root / "styles.css").write_text("body { margin: 0; }\n", encoding="utf-8")

    yield root


@pytest.fixture
def settings(browser_dist: Path) -> GatewaySettings:
    """테스트용 설정 (SSR 켜짐, mock 지연 없음, 외부 API base 고정)."""
    return GatewaySettings(
        port=4000,
        disable_ssr=False,
        browser_dist=browser_dist,
        api_base_url=API_BASE,
        mock_latency_ms=0,
    )


@pytest.fixture(autouse=True)
def _clear_render_toggle(monkeypatch: pytest.MonkeyPatch) -> None:
    """외부 환경의 DISABLE_SSR이 테스트에 새지 않도록."""
    monkeypatch.delenv("DISABLE_SSR", raising=False)
