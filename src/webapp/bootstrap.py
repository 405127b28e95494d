"""
Application bootstrap: (url, base_href, context) → 애플리케이션 루트 마크업.

렌더 엔진이 주입한 컨텍스트(스토어 포함)를 페이지 핸들러까지
그대로 전달한다. 전역 서비스 로케이터 없음.
"""

from src.core.context import RenderContext
from src.domain.errors import ErrorCodes, UnknownRouteError
from src.render.engine import Bootstrap
from src.webapp.pages import render_template
from src.webapp.routes import ROUTES, Route, resolve_route, route_path

NAV_ITEMS = (
    ("home", "Home"),
    ("products", "Products"),
    ("about", "About"),
    ("contact", "Contact"),
)


def create_bootstrap(routes: tuple[Route, ...] = ROUTES) -> Bootstrap:
    """
    라우트 테이블을 고정한 부트스트랩 생성.

    Args:
        routes: 경로 → 핸들러 정적 매핑
    """

    async def bootstrap(url: str, base_href: str, context: RenderContext) -> str:
        route = resolve_route(url, routes, base_href)
        if route.handler is None:
            raise UnknownRouteError(ErrorCodes.UNKNOWN_ROUTE, path=route_path(url, base_href))

        page_markup = await route.handler(context)
        context.title = route.title

        return render_template(
            "layout.html",
            nav_items=NAV_ITEMS,
            active=route.path,
            page=page_markup,
            platform=context.platform.value,
        )

    return bootstrap


bootstrap_application = create_bootstrap()
