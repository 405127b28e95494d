"""
Render context: 명시적 실행 컨텍스트.

전역 "서버인가?" 조회 대신 render/fetch 호출마다 이 객체를 전달한다.
스토어, HTTP 클라이언트, render log는 모두 컨텍스트에 묶여 있고
전역 레지스트리는 없다.
"""

from dataclasses import dataclass

import httpx

from src.core.logging import create_render_log
from src.core.transfer_state import TransferState
from src.domain.schemas import Platform, RenderLog


@dataclass
class RenderContext:
    """
    render pass (서버) 또는 클라이언트 시작 (브라우저) 1회분의 컨텍스트.

    title은 애플리케이션이 라우트에 맞게 채운다 (문서 <title>).
    user_agent, local_storage는 브라우저에서만 채워진다.
    """
    platform: Platform
    state: TransferState
    http: httpx.AsyncClient
    api_base_url: str
    render_log: RenderLog
    title: str | None = None
    user_agent: str = ""
    local_storage: dict[str, str] | None = None

    @property
    def is_server(self) -> bool:
        return self.platform is Platform.SERVER

    @property
    def is_browser(self) -> bool:
        return self.platform is Platform.BROWSER

    def api_url(self, path: str) -> str:
        """API base URL + 리소스 경로."""
        return f"{self.api_base_url.rstrip('/')}/{path.lstrip('/')}"


def create_server_context(
    http: httpx.AsyncClient,
    api_base_url: str,
    url: str,
) -> RenderContext:
    """
    서버 render pass용 컨텍스트 생성.

    호출마다 새 TransferState를 만든다 (요청 간 공유 없음).
    """
    return RenderContext(
        platform=Platform.SERVER,
        state=TransferState(),
        http=http,
        api_base_url=api_base_url,
        render_log=create_render_log(url, Platform.SERVER),
    )
