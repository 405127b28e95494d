"""
Dual-Mode Document Responder.

상태: ServerRendered / StaticShell / Error (모두 terminal, 요청당 응답 1개)

규칙:
- 초기 상태는 Mode Selector가 요청마다 결정
- Error → StaticShell 자동 fallback 없음 (렌더 실패는 항상 에러 응답)
- 재시도 없음
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from fastapi import Request
from fastapi.responses import FileResponse, HTMLResponse, Response

from src.app.dispatch import RenderModeSelector
from src.domain.constants import RENDER_STATE_HEADER, SHELL_CANDIDATES
from src.domain.errors import ConfigError, ErrorCodes, GatewayError, RenderError, ShellUnavailable
from src.domain.schemas import DocumentRequest, RenderMode, ResponseState
from src.render.engine import RenderEngine

logger = logging.getLogger(__name__)

ERROR_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Server Error</title>
</head>
<body>
    <h1>500 Internal Server Error</h1>
    <p>The page could not be rendered. [{code}]</p>
</body>
</html>"""


@dataclass
class DocumentResponse:
    """문서 응답 + 최종 상태."""
    state: ResponseState
    response: Response


def build_document_request(request: Request) -> DocumentRequest:
    """FastAPI Request → 불변 DocumentRequest."""
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return DocumentRequest(
        method=request.method,
        path=path,
        host=request.headers.get("host") or request.url.netloc,
        protocol=request.url.scheme,
    )


def normalize_base_href(root_path: str | None) -> str:
    """ASGI root_path → <base href>. 항상 '/'로 시작하고 끝난다 (예: "/app" → "/app/")."""
    trimmed = (root_path or "").strip("/")
    return f"/{trimmed}/" if trimmed else "/"


class ShellResponder:
    """CSR 셸 서빙: index.csr.html → index.html 순으로 시도."""

    def __init__(self, browser_dist: Path):
        self.browser_dist = browser_dist

    def find_shell(self) -> Path:
        """
        Raises:
            ShellUnavailable: 후보 파일이 모두 없음
        """
        for name in SHELL_CANDIDATES:
            candidate = self.browser_dist / name
            if candidate.is_file():
                return candidate
        raise ShellUnavailable(
            ErrorCodes.SHELL_NOT_FOUND,
            root=str(self.browser_dist),
            candidates=", ".join(SHELL_CANDIDATES),
        )

    def respond(self) -> Response:
        shell = self.find_shell()
        return FileResponse(
            shell,
            media_type="text/html",
            headers={RENDER_STATE_HEADER: ResponseState.STATIC_SHELL.value},
        )


class DocumentResponder:
    """
    문서 요청 → 정확히 1개의 응답 상태.

    Usage:
        responder = DocumentResponder(selector, engine, shell)
        result = await responder.respond(request)
    """

    def __init__(
        self,
        selector: RenderModeSelector,
        engine: RenderEngine,
        shell: ShellResponder,
    ):
        self.selector = selector
        self.engine = engine
        self.shell = shell

    async def respond(self, request: Request) -> DocumentResponse:
        doc_request = build_document_request(request)
        base_href = normalize_base_href(request.scope.get("root_path"))

        try:
            mode = self.selector.current()
        except ConfigError as e:
            logger.error(f"Render mode could not be resolved: {e}")
            return self._error(e)

        if mode is RenderMode.CLIENT_SHELL:
            try:
                return DocumentResponse(ResponseState.STATIC_SHELL, self.shell.respond())
            except ShellUnavailable as e:
                logger.error(f"Error serving static HTML: {e}")
                return self._error(e)

        try:
            outcome = await self.engine.render_document(doc_request.absolute_url, base_href)
        except RenderError as e:
            logger.error(f"SSR rendering error: {e}", exc_info=True)
            return self._error(e)

        response = HTMLResponse(
            content=outcome.html,
            headers={RENDER_STATE_HEADER: ResponseState.SERVER_RENDERED.value},
        )
        return DocumentResponse(ResponseState.SERVER_RENDERED, response)

    def _error(self, error: GatewayError) -> DocumentResponse:
        response = HTMLResponse(
            content=ERROR_PAGE.format(code=error.code),
            status_code=500,
            headers={RENDER_STATE_HEADER: ResponseState.ERROR.value},
        )
        return DocumentResponse(ResponseState.ERROR, response)
