"""
Rendering Engine: URL → SSR HTML 문서.

계약:
- render(url, base_href) → HTML (async)
- 호출마다 새 TransferState 1개 → 부트스트랩에 주입
- 성공 시 채워진 스토어를 문서에 직렬화
- 실패 시 부분/손상 HTML 없이 RenderError
- 동시 호출 안전: 호출별 컨텍스트 외의 상태를 읽거나 쓰지 않음
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

from src.core.context import RenderContext, create_server_context
from src.core.logging import complete_render_log, emit_render_log
from src.domain.errors import ErrorCodes, RenderError
from src.domain.schemas import RenderLog
from src.render.document import build_document

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Hybrid SSR Demo"

# (url, base_href, context) → 애플리케이션 루트 마크업
Bootstrap = Callable[[str, str, RenderContext], Awaitable[str]]


@dataclass
class RenderOutcome:
    """render 결과 (문서 + 로그)."""
    html: str
    render_log: RenderLog


class RenderEngine:
    """
    서버 렌더링 엔진.

    Usage:
        engine = RenderEngine(bootstrap_application, http_client, "http://127.0.0.1:4000/api")
        html = await engine.render("http://localhost:4000/products", "/")
    """

    def __init__(
        self,
        bootstrap: Bootstrap,
        http: httpx.AsyncClient,
        api_base_url: str,
        default_title: str = DEFAULT_TITLE,
    ):
        """
        Args:
            bootstrap: 애플리케이션 부트스트랩
            http: 공유 HTTP 클라이언트 (상태 없음)
            api_base_url: 백엔드 API base URL (요청 Host와 무관한 고정값)
            default_title: 앱이 제목을 정하지 않았을 때의 문서 제목
        """
        self._bootstrap = bootstrap
        self._http = http
        self._api_base_url = api_base_url
        self._default_title = default_title

    @property
    def api_base_url(self) -> str:
        return self._api_base_url

    async def render(self, url: str, base_href: str = "/") -> str:
        """URL을 렌더링해 HTML 문서 반환."""
        outcome = await self.render_document(url, base_href)
        return outcome.html

    async def render_document(self, url: str, base_href: str = "/") -> RenderOutcome:
        """
        URL 렌더링 + render log.

        Args:
            url: 프로토콜/호스트/원본 경로로 구성된 절대 URL
            base_href: 애플리케이션 base href

        Returns:
            RenderOutcome

        Raises:
            RenderError: 부트스트랩/라우팅/예상 밖 fetch 예외
        """
        context = create_server_context(self._http, self._api_base_url, url)

        try:
            app_markup = await self._bootstrap(url, base_href, context)
            html = build_document(
                app_markup,
                context.state,
                title=context.title or self._default_title,
                base_href=base_href,
            )
        except RenderError as e:
            self._fail(context, e)
            raise
        except Exception as e:
            error = RenderError(ErrorCodes.RENDER_FAILED, url=url, cause=e)
            self._fail(context, error)
            raise error from e

        complete_render_log(context.render_log, success=True, state_keys=context.state.keys())
        emit_render_log(context.render_log)
        return RenderOutcome(html=html, render_log=context.render_log)

    def _fail(self, context: RenderContext, error: RenderError) -> None:
        complete_render_log(
            context.render_log,
            success=False,
            state_keys=context.state.keys(),
            error_code=error.code,
            error_context=error.to_dict(),
        )
        emit_render_log(context.render_log)
