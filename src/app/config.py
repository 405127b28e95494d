"""
Configuration: default.yaml + 환경 변수.

우선순위: 환경 변수 (PORT, DISABLE_SSR) > YAML > 기본값
잘못된 PORT / 토글 값 → ConfigError (부팅 실패)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from src.domain.constants import (
    API_PREFIX,
    DEFAULT_BROWSER_DIST,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MOCK_LATENCY_MS,
    DEFAULT_PORT,
    DEFAULT_STATIC_MAX_AGE,
    ENV_CONFIG_PATH,
    ENV_DISABLE_SSR,
    ENV_PORT,
    FALSE_VALUES,
    LOOPBACK_HOST,
    TRUE_VALUES,
    WILDCARD_HOSTS,
)
from src.domain.errors import ConfigError, ErrorCodes

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "default.yaml"


@dataclass
class GatewaySettings:
    """게이트웨이 설정."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    disable_ssr: bool = False
    freeze_render_mode: bool = False  # True면 시작 시 모드 고정
    browser_dist: Path = PROJECT_ROOT / DEFAULT_BROWSER_DIST
    static_max_age: int = DEFAULT_STATIC_MAX_AGE
    api_base_url: str | None = None  # None이면 loopback + /api
    mock_latency_ms: int = DEFAULT_MOCK_LATENCY_MS
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def ssr_enabled(self) -> bool:
        return not self.disable_ssr

    @property
    def backend_api_base(self) -> str:
        """
        백엔드 API base URL.

        api_base_url이 없으면 이 프로세스의 mock API (loopback).
        요청 Host 헤더로부터 만들지 않는다.
        """
        if self.api_base_url:
            return self.api_base_url
        host = LOOPBACK_HOST if self.host in WILDCARD_HOSTS else self.host
        if ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{self.port}{API_PREFIX}"


# =============================================================================
# Value Parsing
# =============================================================================


def parse_toggle(value: Any, default: bool) -> bool:
    """
    boolean 형태 문자열 파싱.

    None/빈 문자열 → default. true/1/yes/on, false/0/no/off (대소문자 무시).

    Raises:
        ConfigError: INVALID_TOGGLE
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if not text:
        return default
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(ErrorCodes.INVALID_TOGGLE, value=value)


def parse_port(value: Any) -> int:
    """
    포트 파싱 (1-65535).

    Raises:
        ConfigError: INVALID_PORT
    """
    if isinstance(value, bool):
        raise ConfigError(ErrorCodes.INVALID_PORT, value=value)
    try:
        port = int(str(value).strip())
    except ValueError as e:
        raise ConfigError(ErrorCodes.INVALID_PORT, value=value) from e
    if not 1 <= port <= 65535:
        raise ConfigError(ErrorCodes.INVALID_PORT, value=value)
    return port


def _parse_non_negative(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(ErrorCodes.CONFIG_LOAD_FAILED, field=field_name, value=value) from e
    if number < 0:
        raise ConfigError(ErrorCodes.CONFIG_LOAD_FAILED, field=field_name, value=value)
    return number


# =============================================================================
# Loading
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드. 파일이 없으면 빈 dict."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(ErrorCodes.CONFIG_LOAD_FAILED, path=str(config_path), cause=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(ErrorCodes.CONFIG_LOAD_FAILED, path=str(config_path), reason="not a mapping")
    return data


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> GatewaySettings:
    """
    YAML + 환경 변수 → GatewaySettings.

    Args:
        config_path: 설정 파일 경로 (None이면 GATEWAY_CONFIG 또는 default.yaml)
        environ: 환경 변수 (테스트용 주입)

    Raises:
        ConfigError: 잘못된 값
    """
    env = os.environ if environ is None else environ
    if config_path is None and env.get(ENV_CONFIG_PATH):
        config_path = Path(env[ENV_CONFIG_PATH])

    config = load_config(config_path)
    server = config.get("server") or {}
    render = config.get("render") or {}
    paths = config.get("paths") or {}
    static = config.get("static") or {}
    api = config.get("api") or {}
    logging_cfg = config.get("logging") or {}

    port = parse_port(env.get(ENV_PORT) or server.get("port", DEFAULT_PORT))
    disable_ssr = parse_toggle(
        env.get(ENV_DISABLE_SSR),
        default=parse_toggle(render.get("disable_ssr"), default=False),
    )

    browser_dist = Path(paths.get("browser_dist", DEFAULT_BROWSER_DIST))
    if not browser_dist.is_absolute():
        browser_dist = PROJECT_ROOT / browser_dist

    return GatewaySettings(
        host=str(server.get("host", DEFAULT_HOST)),
        port=port,
        disable_ssr=disable_ssr,
        freeze_render_mode=parse_toggle(render.get("freeze_mode"), default=False),
        browser_dist=browser_dist,
        static_max_age=_parse_non_negative(
            static.get("max_age", DEFAULT_STATIC_MAX_AGE), "static.max_age"
        ),
        api_base_url=api.get("base_url") or None,
        mock_latency_ms=_parse_non_negative(
            api.get("mock_latency_ms", DEFAULT_MOCK_LATENCY_MS), "api.mock_latency_ms"
        ),
        log_level=str(logging_cfg.get("level", DEFAULT_LOG_LEVEL)).upper(),
    )
