"""
Request Router / Render-Mode Selector.

- 경로 → static / api / document 분류 (고정 확장자 목록)
- 문서 요청의 렌더 모드 결정

분류 규칙에 없는 경로는 모두 document로 fallback (예: /report.pdf).
이 모듈은 분기만 하고 에러를 만들지 않는다.
"""

import os
from collections.abc import Mapping

from src.app.config import GatewaySettings, parse_toggle
from src.domain.constants import API_PREFIX, ENV_DISABLE_SSR, STATIC_EXTENSIONS
from src.domain.schemas import RenderMode, RequestKind


def classify_path(path: str) -> RequestKind:
    """
    요청 경로 분류.

    Args:
        path: URL 경로 (쿼리스트링 제외)
    """
    last_segment = path.rsplit("/", 1)[-1]
    if "." in last_segment and last_segment.rsplit(".", 1)[-1] in STATIC_EXTENSIONS:
        return RequestKind.STATIC

    if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
        return RequestKind.API

    return RequestKind.DOCUMENT


class RenderModeSelector:
    """
    렌더 모드 결정.

    기본: 요청 처리 시점마다 DISABLE_SSR을 다시 읽음 (재시작 없이 전환 가능).
    freeze_render_mode=True: 생성 시 1회 결정 후 고정.
    """

    def __init__(
        self,
        settings: GatewaySettings,
        environ: Mapping[str, str] | None = None,
    ):
        self._settings = settings
        self._environ = os.environ if environ is None else environ
        self._frozen: RenderMode | None = None
        if settings.freeze_render_mode:
            self._frozen = self._read()

    @property
    def is_frozen(self) -> bool:
        return self._frozen is not None

    def _read(self) -> RenderMode:
        disabled = parse_toggle(
            self._environ.get(ENV_DISABLE_SSR),
            default=self._settings.disable_ssr,
        )
        return RenderMode.CLIENT_SHELL if disabled else RenderMode.SERVER

    def current(self) -> RenderMode:
        """
        현재 렌더 모드.

        Raises:
            ConfigError: 요청 시점에 토글 값이 잘못된 경우
        """
        if self._frozen is not None:
            return self._frozen
        return self._read()
