"""
Page handlers: 라우트별 마크업 생성 (Jinja2).

각 핸들러는 서버/브라우저 양쪽에서 동일하게 실행된다.
데이터는 반드시 data.py의 facade를 통해서만 가져온다.
"""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.core.context import RenderContext
from src.webapp.data import get_about_info, get_products

TEMPLATES_DIR = Path(__file__).parent / "templates"
VIEW_COUNT_KEY = "viewCount"

env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def render_template(name: str, **context: Any) -> str:
    return env.get_template(name).render(**context)


def browser_info(context: RenderContext) -> str:
    if not context.is_browser:
        return "Server-side rendering"
    return f"Browser: {context.user_agent[:50]}..."


def bump_view_count(context: RenderContext) -> int:
    """
    local storage의 방문 횟수 +1 후 반환.

    브라우저 전용. 서버에서는 저장소에 손대지 않고 0.
    """
    if not context.is_browser or context.local_storage is None:
        return 0
    stored = context.local_storage.get(VIEW_COUNT_KEY, "")
    count = int(stored) + 1 if stored.isdigit() else 1
    context.local_storage[VIEW_COUNT_KEY] = str(count)
    return count


async def home_page(context: RenderContext) -> str:
    return render_template("home.html", is_server=context.is_server)


async def products_page(context: RenderContext) -> str:
    products = await get_products(context)
    return render_template("products.html", products=products)


async def about_page(context: RenderContext) -> str:
    about = await get_about_info(context)
    return render_template(
        "about.html",
        about=about,
        is_browser=context.is_browser,
        view_count=bump_view_count(context),
        browser_info=browser_info(context),
    )


async def contact_page(context: RenderContext) -> str:
    # 폼 구조만 렌더링, 제출 처리는 클라이언트 몫
    return render_template("contact.html", is_browser=context.is_browser)
