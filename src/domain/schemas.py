"""
Data schemas for the gateway.

규칙:
- Request는 불변 (요청당 1개)
- transfer state 값은 JSON 직렬화 가능해야 함
- 애플리케이션 데이터(Product, AboutInfo)는 wire 포맷(dict)과 분리
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Enums
# =============================================================================

class RenderMode(str, Enum):
    """
    문서 요청 렌더 모드.

    SERVER: 서버에서 마크업 + transfer state 생성
    CLIENT_SHELL: 최소 셸만 내려주고 클라이언트가 렌더링
    """
    SERVER = "server"
    CLIENT_SHELL = "client_shell"


class Platform(str, Enum):
    """실행 컨텍스트. 전역 조회 대신 명시적으로 전달된다."""
    SERVER = "server"
    BROWSER = "browser"


class RequestKind(str, Enum):
    """인바운드 요청 분류."""
    STATIC = "static"
    API = "api"
    DOCUMENT = "document"


class ResponseState(str, Enum):
    """
    문서 응답 상태 (모두 terminal).

    Error → StaticShell 자동 fallback 없음.
    """
    SERVER_RENDERED = "server_rendered"
    STATIC_SHELL = "static_shell"
    ERROR = "error"


class FetchSource(str, Enum):
    """
    FetchResult 태그.

    CACHED: transfer state에서 읽음
    LIVE: 네트워크에서 가져옴
    FALLBACK: 호출 실패, caller가 넘긴 fallback 값
    """
    CACHED = "cached"
    LIVE = "live"
    FALLBACK = "fallback"


# =============================================================================
# Request
# =============================================================================

@dataclass(frozen=True)
class DocumentRequest:
    """
    인바운드 요청.

    path는 쿼리스트링을 포함한 원본 경로 (예: /products?page=2).
    """
    method: str
    path: str
    host: str
    protocol: str

    @property
    def absolute_url(self) -> str:
        """앱 내부 라우팅이 인바운드 요청과 동일하게 해석되도록 절대 URL 구성."""
        return f"{self.protocol}://{self.host}{self.path}"

    @property
    def origin(self) -> str:
        return f"{self.protocol}://{self.host}"


# =============================================================================
# Application Data
# =============================================================================

@dataclass
class Product:
    """상품 (GET /api/products 항목)."""
    id: int
    name: str
    description: str
    price: float
    category: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        return cls(
            id=int(data.get("id", 0)),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            price=data.get("price", 0),
            category=str(data.get("category", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
        }


@dataclass
class AboutInfo:
    """About 페이지 콘텐츠. wire 키는 lastUpdated (camelCase)."""
    title: str
    content: str
    last_updated: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AboutInfo":
        return cls(
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            last_updated=str(data.get("lastUpdated", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "lastUpdated": self.last_updated,
        }


# =============================================================================
# Render Log Schemas
# =============================================================================

@dataclass
class FetchEvent:
    """
    Facade 호출 1건 기록.

    render log에 fetches 배열로 기록됨.
    """
    key: str
    source: str  # cached, live, fallback
    url: str | None = None
    error_code: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "source": self.source,
            "url": self.url,
            "error_code": self.error_code,
            "message": self.message,
        }


@dataclass
class RenderLog:
    """
    렌더 로그.

    render pass 단위 실행 결과 및 fetch 이벤트.
    """
    render_id: str
    url: str
    platform: str
    started_at: str  # ISO 8601
    finished_at: str | None = None
    result: str = "pending"  # pending, success, failed

    fetches: list[FetchEvent] = field(default_factory=list)
    state_keys: list[str] = field(default_factory=list)

    # Error (if failed)
    error_code: str | None = None
    error_context: dict[str, Any] | None = None

    @property
    def network_calls(self) -> int:
        """실제 네트워크 호출 수 (cached 제외)."""
        return sum(1 for f in self.fetches if f.source != FetchSource.CACHED.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "render_id": self.render_id,
            "url": self.url,
            "platform": self.platform,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "fetches": [f.to_dict() for f in self.fetches],
            "state_keys": self.state_keys,
            "error_code": self.error_code,
            "error_context": self.error_context,
        }
