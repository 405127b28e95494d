"""
Render logging: render log schema, fetch events, process logging setup.

규칙:
- render pass마다 RenderLog 1개 (요청 간 공유 금지)
- fetch 이벤트 필수 컨텍스트: key, source, url, error_code
- 성공/실패 모두 emit
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from src.core.ids import generate_render_id
from src.domain.errors import GatewayError
from src.domain.schemas import FetchEvent, FetchSource, Platform, RenderLog

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """프로세스 시작 시 root 로거 설정."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


# =============================================================================
# Render Log Management
# =============================================================================


def create_render_log(url: str, platform: Platform) -> RenderLog:
    """
    새 RenderLog 생성.

    Args:
        url: 렌더 대상 절대 URL
        platform: 실행 컨텍스트

    Returns:
        초기화된 RenderLog
    """
    return RenderLog(
        render_id=generate_render_id(),
        url=url,
        platform=platform.value,
        started_at=datetime.now(UTC).isoformat(),
    )


def record_fetch(
    render_log: RenderLog,
    key: str,
    source: FetchSource,
    url: str | None = None,
    error: GatewayError | None = None,
) -> None:
    """
    Facade 호출 이벤트 기록.

    Args:
        render_log: RenderLog 인스턴스
        key: transfer state 키
        source: cached / live / fallback
        url: 호출한 URL (cached면 None)
        error: 실패 시 FetchError
    """
    event = FetchEvent(
        key=key,
        source=source.value,
        url=url,
        error_code=error.code if error else None,
        message=str(error) if error else None,
    )
    render_log.fetches.append(event)


def complete_render_log(
    render_log: RenderLog,
    success: bool,
    state_keys: list[str] | None = None,
    error_code: str | None = None,
    error_context: dict[str, Any] | None = None,
) -> None:
    """
    RenderLog 완료 처리.

    Args:
        render_log: RenderLog 인스턴스
        success: 성공 여부
        state_keys: 직렬화된 transfer state 키 목록
        error_code: 에러 코드 (실패 시)
        error_context: 에러 컨텍스트 (실패 시)
    """
    render_log.finished_at = datetime.now(UTC).isoformat()
    render_log.result = "success" if success else "failed"
    render_log.state_keys = list(state_keys or [])

    if not success:
        render_log.error_code = error_code
        render_log.error_context = error_context


def emit_render_log(render_log: RenderLog) -> None:
    """완료된 RenderLog를 JSON 한 줄로 출력."""
    payload = json.dumps(render_log.to_dict(), ensure_ascii=False)
    if render_log.result == "failed":
        logger.warning(f"render {payload}")
    else:
        logger.info(f"render {payload}")
