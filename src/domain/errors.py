"""
Error definitions for the gateway.

분류:
- ConfigError → 부팅 시 치명적 (시작 불가)
- RenderError → 재시도 없음, 500 응답으로 변환
- FetchError → Data Fetch Facade 내부에서 항상 fallback으로 복구
- StaticAssetMissing → 404 응답
"""

from typing import Any


class GatewayError(Exception):
    """
    게이트웨이 에러 기본 클래스.

    code + context 구조로 로그/JSON 직렬화가 가능하다.

    Usage:
        raise RenderError(ErrorCodes.RENDER_FAILED, url=url, cause=e)
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **{k: str(v) for k, v in self.context.items()},
        }


class ConfigError(GatewayError):
    """잘못된 PORT / 렌더 모드 토글 값. 부팅 시 치명적."""


class RenderError(GatewayError):
    """애플리케이션 부트스트랩 또는 내부 라우팅 실패. 재시도하지 않는다."""


class UnknownRouteError(RenderError):
    """라우트 테이블에 매칭되는 경로가 없음."""


class FetchError(GatewayError):
    """백엔드 API 호출 실패. Facade 경계 밖으로 전파되지 않는다."""


class StaticAssetMissing(GatewayError):
    """요청한 정적 파일이 없음 (404)."""


class ShellUnavailable(GatewayError):
    """CSR 셸 문서(index.csr.html / index.html)를 찾을 수 없음."""


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Config ===
    INVALID_PORT = "INVALID_PORT"
    INVALID_TOGGLE = "INVALID_TOGGLE"
    CONFIG_LOAD_FAILED = "CONFIG_LOAD_FAILED"

    # === Render ===
    RENDER_FAILED = "RENDER_FAILED"
    UNKNOWN_ROUTE = "UNKNOWN_ROUTE"
    SHELL_NOT_FOUND = "SHELL_NOT_FOUND"

    # === Fetch ===
    FETCH_FAILED = "FETCH_FAILED"

    # === Static ===
    STATIC_ASSET_MISSING = "STATIC_ASSET_MISSING"
