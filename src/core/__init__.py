"""
Core layer: transfer state + Data Fetch Facade.

서버/클라이언트 간 중복 fetch를 막는 유일한 정합성 계약.
이 모듈의 결함은 중복 호출 또는 hydration 후 데이터 누락으로 나타난다.

역할:
- TransferState (요청 단위 캐시, 직렬화)
- RenderContext (명시적 플랫폼 플래그)
- fetch_with_cache (cache → network → fallback)
- hydration (클라이언트 측 복원)
"""

from .context import RenderContext, create_server_context
from .fetch import FetchResult, fetch_with_cache
from .hydration import create_browser_context, extract_transfer_state
from .ids import generate_render_id
from .logging import (
    complete_render_log,
    configure_logging,
    create_render_log,
    emit_render_log,
    record_fetch,
)
from .transfer_state import StateKey, TransferState, make_state_key

__all__ = [
    # transfer_state
    "TransferState",
    "StateKey",
    "make_state_key",
    # context
    "RenderContext",
    "create_server_context",
    # fetch
    "FetchResult",
    "fetch_with_cache",
    # hydration
    "extract_transfer_state",
    "create_browser_context",
    # ids
    "generate_render_id",
    # logging
    "configure_logging",
    "create_render_log",
    "record_fetch",
    "complete_render_log",
    "emit_render_log",
]
