"""
test_dispatch.py - 요청 분류 / 렌더 모드 결정 테스트

DoD:
- 고정 확장자 → static, /api → api, 나머지 → document
- 기본: 요청 시점마다 DISABLE_SSR 반영
- freeze_mode: 시작 시 고정
"""

import pytest

from src.app.config import GatewaySettings
from src.app.dispatch import RenderModeSelector, classify_path
from src.domain.errors import ConfigError
from src.domain.schemas import RenderMode, RequestKind


class TestClassifyPath:
    """classify_path 함수 테스트."""

    @pytest.mark.parametrize(
        "path",
        [
            "/main.js",
            "/styles.css",
            "/favicon.ico",
            "/assets/logo.png",
            "/assets/photo.jpeg",
            "/fonts/inter.woff2",
            "/api/bundle.js",
        ],
    )
    def test_static(self, path):
        assert classify_path(path) is RequestKind.STATIC

    @pytest.mark.parametrize("path", ["/api", "/api/products", "/api/unknown/deep"])
    def test_api(self, path):
        assert classify_path(path) is RequestKind.API

    @pytest.mark.parametrize(
        "path",
        ["/", "/home", "/products", "/apiary", "/report.pdf", "/file.JS", "/v1.2/page"],
    )
    def test_document_fallback(self, path):
        """목록에 없는 확장자, 대문자 확장자 등은 모두 document."""
        assert classify_path(path) is RequestKind.DOCUMENT


class TestRenderModeSelector:
    """RenderModeSelector 테스트."""

    def test_default_is_server(self):
        selector = RenderModeSelector(GatewaySettings(), environ={})

        assert selector.current() is RenderMode.SERVER

    def test_config_disable(self):
        selector = RenderModeSelector(GatewaySettings(disable_ssr=True), environ={})

        assert selector.current() is RenderMode.CLIENT_SHELL

    def test_reads_toggle_per_request(self):
        """재시작 없이 모드 전환."""
        environ: dict[str, str] = {}
        selector = RenderModeSelector(GatewaySettings(), environ=environ)

        assert selector.current() is RenderMode.SERVER
        environ["DISABLE_SSR"] = "true"
        assert selector.current() is RenderMode.CLIENT_SHELL
        environ["DISABLE_SSR"] = "false"
        assert selector.current() is RenderMode.SERVER

    def test_frozen_ignores_later_changes(self):
        environ: dict[str, str] = {}
        selector = RenderModeSelector(GatewaySettings(freeze_render_mode=True), environ=environ)

        environ["DISABLE_SSR"] = "true"

        assert selector.is_frozen
        assert selector.current() is RenderMode.SERVER

    def test_invalid_toggle_at_request_time(self):
        environ = {"DISABLE_SSR": "maybe"}
        selector = RenderModeSelector(GatewaySettings(), environ=environ)

        with pytest.raises(ConfigError):
            selector.current()
