"""
Route table: 경로 → 페이지 핸들러 정적 매핑.

- ''  → /home 리다이렉트
- '**' → /home 리다이렉트 (와일드카드)
- 와일드카드가 없는 테이블에서 매칭 실패 → UnknownRouteError
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from urllib.parse import urlsplit

from src.core.context import RenderContext
from src.domain.errors import ErrorCodes, UnknownRouteError
from src.webapp import pages

WILDCARD = "**"
MAX_REDIRECTS = 10

PageHandler = Callable[[RenderContext], Awaitable[str]]


@dataclass(frozen=True)
class Route:
    """라우트 1개. handler 또는 redirect_to 중 하나."""
    path: str
    handler: PageHandler | None = None
    title: str | None = None
    redirect_to: str | None = None


ROUTES: tuple[Route, ...] = (
    Route(path="", redirect_to="/home"),
    Route(path="home", handler=pages.home_page, title="Home - Hybrid SSR Demo"),
    Route(path="products", handler=pages.products_page, title="Products - Hybrid SSR Demo"),
    Route(path="about", handler=pages.about_page, title="About - Hybrid SSR Demo"),
    Route(path="contact", handler=pages.contact_page, title="Contact - Hybrid SSR Demo"),
    Route(path=WILDCARD, redirect_to="/home"),
)


def route_path(url: str, base_href: str = "/") -> str:
    """
    절대/상대 URL → 라우트 경로 (앞뒤 '/' 제거, base href 제외).

    예: "http://h/app/products?x=1", base "/app/" → "products"
    """
    path = urlsplit(url).path
    base = "/" + base_href.strip("/")
    if base != "/" and (path == base or path.startswith(base + "/")):
        path = path[len(base):]
    return path.strip("/")


def resolve_route(
    url: str,
    routes: tuple[Route, ...] = ROUTES,
    base_href: str = "/",
) -> Route:
    """
    URL에 매칭되는 핸들러 라우트 찾기 (리다이렉트 추적).

    Raises:
        UnknownRouteError: 매칭 실패 또는 리다이렉트 루프
    """
    path = route_path(url, base_href)
    table = {route.path: route for route in routes}

    for _ in range(MAX_REDIRECTS):
        route = table.get(path) or table.get(WILDCARD)
        if route is None:
            raise UnknownRouteError(ErrorCodes.UNKNOWN_ROUTE, path=path)
        if route.redirect_to is None:
            return route
        path = route.redirect_to.strip("/")

    raise UnknownRouteError(ErrorCodes.UNKNOWN_ROUTE, path=path, reason="redirect loop")
