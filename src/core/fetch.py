"""
Data Fetch Facade: transfer state를 먼저 확인하는 fetch.

알고리즘 (리소스 단위):
1. 스토어에 키가 있으면 즉시 반환 (플랫폼 무관, 네트워크 호출 없음)
2. 없으면 네트워크 호출
3. 성공: 서버에서만 스토어에 기록 (브라우저는 기록하지 않음)
4. 실패: 스토어 기록 없이 caller가 넘긴 fallback 반환 + 로그

→ 서버/클라이언트 경계를 통틀어 논리적 요청당 정확히 1회 fetch.
"""

import json
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

from src.core.context import RenderContext
from src.core.logging import record_fetch
from src.core.transfer_state import StateKey, key_name
from src.domain.errors import ErrorCodes, FetchError
from src.domain.schemas import FetchSource

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 응답 본문 형태 검사 (False → fallback)
PayloadCheck = Callable[[Any], bool]


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Facade 결과 + 출처 태그."""
    value: T
    source: FetchSource

    @property
    def is_cached(self) -> bool:
        return self.source is FetchSource.CACHED

    @property
    def is_live(self) -> bool:
        return self.source is FetchSource.LIVE

    @property
    def is_fallback(self) -> bool:
        return self.source is FetchSource.FALLBACK


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def decode_json(content: bytes) -> Any:
    """
    엄격한 JSON 디코딩.

    NaN, Infinity 같은 비표준 상수와 float 범위를 넘는 숫자는 ValueError.
    transfer state에 저장할 수 없는 값은 응답 단계에서 거부된다.
    """
    return json.loads(content, parse_constant=_reject_constant, parse_float=_parse_finite_float)


async def fetch_with_cache(
    context: RenderContext,
    key: "StateKey[T] | str",
    path: str,
    fallback: T,
    check: PayloadCheck | None = None,
) -> FetchResult[T]:
    """
    transfer state 우선 fetch.

    Args:
        context: 서버/브라우저 실행 컨텍스트
        key: transfer state 키
        path: API base URL 기준 리소스 경로 (예: "/products")
        fallback: 실패 시 반환할 값
        check: 응답 형태 검사. False면 실패로 취급 (저장하지 않음)

    Returns:
        FetchResult (cached / live / fallback)

    Note:
        httpx 에러, non-2xx 응답, JSON 디코딩 실패, 형태 불일치,
        저장 불가 값만 fallback으로 복구.
        그 외 예외는 그대로 전파된다 (서버에서는 RenderError가 됨).
    """
    name = key_name(key)
    state = context.state

    if state.has_key(name):
        record_fetch(context.render_log, name, FetchSource.CACHED)
        return FetchResult(state.get(name, fallback), FetchSource.CACHED)

    url = context.api_url(path)
    try:
        response = await context.http.get(url)
        response.raise_for_status()
        value: Any = decode_json(response.content)
        if check is not None and not check(value):
            raise ValueError(f"unexpected payload shape for {name!r}")
        if context.is_server:
            state.set(name, value)
    except (httpx.HTTPError, ValueError, TypeError) as e:
        error = FetchError(ErrorCodes.FETCH_FAILED, key=name, url=url, cause=e)
        logger.warning(f"Error fetching {name}: {error}")
        record_fetch(context.render_log, name, FetchSource.FALLBACK, url=url, error=error)
        return FetchResult(fallback, FetchSource.FALLBACK)

    record_fetch(context.render_log, name, FetchSource.LIVE, url=url)
    return FetchResult(value, FetchSource.LIVE)
