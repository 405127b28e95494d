"""
Hydration: 클라이언트 시작 시 transfer state 복원.

서버가 문서에 넣은 <script id="transfer-state"> 를 읽어
브라우저 컨텍스트를 만든다. 복원은 시작 시 1회뿐이며,
이후 스토어는 서버와 동기화되지 않는다 (읽은 값은 복사본).
"""

import logging
import re

import httpx

from src.core.context import RenderContext
from src.core.logging import create_render_log
from src.core.transfer_state import TransferState
from src.domain.constants import TRANSFER_STATE_SCRIPT_ID
from src.domain.schemas import Platform

logger = logging.getLogger(__name__)

_STATE_SCRIPT_RE = re.compile(
    r'<script id="' + re.escape(TRANSFER_STATE_SCRIPT_ID) + r'" type="application/json">'
    r"(.*?)</script>",
    re.DOTALL,
)


def extract_transfer_state(document: str) -> TransferState:
    """
    문서에서 transfer state 복원.

    스크립트가 없으면 (CSR 셸) 빈 스토어.
    스크립트가 손상되어 있으면 경고 후 빈 스토어 → 클라이언트가 직접 fetch.
    """
    match = _STATE_SCRIPT_RE.search(document)
    if match is None:
        return TransferState()

    try:
        return TransferState.from_json(match.group(1))
    except ValueError as e:
        logger.warning(f"Discarding unreadable transfer state: {e}")
        return TransferState()


def create_browser_context(
    document: str,
    http: httpx.AsyncClient,
    api_base_url: str,
    url: str = "",
    user_agent: str = "",
    local_storage: dict[str, str] | None = None,
) -> RenderContext:
    """
    클라이언트 시작 컨텍스트 생성.

    Args:
        document: 서버가 내려준 HTML 문서
        http: 클라이언트 측 HTTP 클라이언트
        api_base_url: API base URL
        url: 현재 페이지 URL (로그용)
        user_agent: 브라우저 user agent
        local_storage: 브라우저 local storage (None이면 빈 저장소)
    """
    return RenderContext(
        platform=Platform.BROWSER,
        state=extract_transfer_state(document),
        http=http,
        api_base_url=api_base_url,
        render_log=create_render_log(url, Platform.BROWSER),
        user_agent=user_agent,
        local_storage={} if local_storage is None else local_storage,
    )
