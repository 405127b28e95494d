"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run python -m src.app.main
- 프로덕션: uv run hybrid-gateway
- SSR 끄기: DISABLE_SSR=true uv run hybrid-gateway
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from src.app.config import GatewaySettings, load_settings
from src.app.dispatch import RenderModeSelector
from src.app.responder import DocumentResponder, ShellResponder
from src.app.routes import api, document
from src.app.static import StaticAssetServer
from src.core.logging import configure_logging
from src.domain.errors import ConfigError
from src.render.engine import Bootstrap, RenderEngine
from src.webapp.bootstrap import bootstrap_application

logger = logging.getLogger(__name__)


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: GatewaySettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    bootstrap: Bootstrap | None = None,
) -> FastAPI:
    """
    게이트웨이 앱 생성.

    Args:
        settings: 설정 (None이면 default.yaml + 환경 변수)
        http_client: 백엔드 API 호출용 클라이언트 (None이면 lifespan에서 생성)
        bootstrap: 애플리케이션 부트스트랩 (None이면 기본 webapp)
    """
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        애플리케이션 생명주기 관리.

        시작 시: HTTP 클라이언트, 렌더 엔진, 응답기 구성
        종료 시: 직접 만든 HTTP 클라이언트 정리
        """
        # Startup
        owns_client = app.state.http_client is None
        client: httpx.AsyncClient = app.state.http_client or httpx.AsyncClient(timeout=None)
        app.state.http_client = client

        engine = RenderEngine(
            bootstrap or bootstrap_application,
            client,
            api_base_url=settings.backend_api_base,
        )
        app.state.static_server = StaticAssetServer(settings.browser_dist, settings.static_max_age)
        app.state.document_responder = DocumentResponder(
            RenderModeSelector(settings),
            engine,
            ShellResponder(settings.browser_dist),
        )
        _log_banner(settings, app.state.document_responder.selector)

        yield

        # Shutdown
        if owns_client:
            await client.aclose()
            app.state.http_client = None

    app = FastAPI(
        title="Hybrid Render Gateway",
        description="SSR / CSR 셸 분기 + transfer state",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.http_client = http_client

    # API 라우트 → catch-all 순서 유지
    app.include_router(api.api_router, prefix="/api", tags=["Mock API"])
    app.include_router(document.router, tags=["Documents"])

    return app


def _log_banner(settings: GatewaySettings, selector: RenderModeSelector) -> None:
    base = f"http://localhost:{settings.port}"
    logger.info(f"Gateway listening on {base}")
    logger.info(f"API endpoints available at {base}/api")
    logger.info(f"Backend API base: {settings.backend_api_base}")
    if settings.disable_ssr:
        logger.info("SSR is DISABLED - serving the client-side shell")
        logger.info("To enable SSR: unset DISABLE_SSR or set DISABLE_SSR=false")
    else:
        logger.info("SSR is ENABLED - rendering documents on the server")
        logger.info("To disable SSR: set DISABLE_SSR=true")
    if selector.is_frozen:
        logger.info("Render mode is frozen until restart")


# =============================================================================
# CLI Entry Point
# =============================================================================


def main() -> None:
    """설정 로드 → uvicorn 실행. 설정 오류 시 exit 1."""
    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging()
        logger.critical(f"Configuration invalid: {e}")
        raise SystemExit(1) from e

    configure_logging(settings.log_level)

    import uvicorn

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
