"""
Domain Constants: 게이트웨이 전역 상수.

요청 분류 규칙, transfer state 마커, 설정 기본값 등.
"""

# =============================================================================
# Request Classification (요청 분류)
# =============================================================================
# 아래 확장자로 끝나는 경로만 정적 파일로 취급.
# 그 외(예: /report.pdf)는 모두 문서 요청으로 fallback.

STATIC_EXTENSIONS = (
    "js",
    "css",
    "ico",
    "png",
    "jpg",
    "jpeg",
    "gif",
    "svg",
    "woff",
    "woff2",
    "ttf",
    "eot",
)

API_PREFIX = "/api"

# =============================================================================
# Transfer State Markers (직렬화 마커)
# =============================================================================
# <script id="transfer-state" type="application/json">{...}</script>

TRANSFER_STATE_SCRIPT_ID = "transfer-state"
APP_ROOT_TAG = "app-root"
SERVER_RENDER_ATTR = 'data-render="server"'

# =============================================================================
# Shell Documents (CSR 셸)
# =============================================================================
# browser 에셋 루트 기준. 앞의 파일이 없으면 다음 파일로 fallback.

SHELL_CANDIDATES = ("index.csr.html", "index.html")

# =============================================================================
# Response Headers
# =============================================================================

RENDER_STATE_HEADER = "X-Render-State"
STATIC_CACHE_CONTROL = "public, max-age={max_age}"

# =============================================================================
# Config Defaults (설정 기본값)
# =============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4000
DEFAULT_BROWSER_DIST = "dist/browser"
DEFAULT_STATIC_MAX_AGE = 31_536_000  # 1년
DEFAULT_MOCK_LATENCY_MS = 100
DEFAULT_LOG_LEVEL = "INFO"

# api.base_url 미설정 시 백엔드 = 이 프로세스 (loopback)
LOOPBACK_HOST = "127.0.0.1"
WILDCARD_HOSTS = frozenset({"", "0.0.0.0", "::"})

ENV_PORT = "PORT"
ENV_DISABLE_SSR = "DISABLE_SSR"
ENV_CONFIG_PATH = "GATEWAY_CONFIG"

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
FALSE_VALUES = frozenset({"false", "0", "no", "off"})
