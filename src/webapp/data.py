"""
Data service: 리소스별 Data Fetch Facade.

- 서버: API 호출 후 transfer state에 저장
- 클라이언트: transfer state 먼저 확인, 없을 때만 호출

실패는 fallback으로 복구되므로 호출자는 "정상적으로 비어 있음"과
"fetch 실패"를 구분할 수 없다 (로그로만 확인).
"""

from datetime import UTC, datetime
from typing import Any

from src.core.context import RenderContext
from src.core.fetch import fetch_with_cache
from src.core.transfer_state import make_state_key
from src.domain.schemas import AboutInfo, Product

# 애플리케이션 전체에서 유일해야 함
PRODUCTS_KEY = make_state_key("products")
ABOUT_KEY = make_state_key("about")


def is_product_list(payload: Any) -> bool:
    return isinstance(payload, list) and all(isinstance(item, dict) for item in payload)


def is_about_payload(payload: Any) -> bool:
    return isinstance(payload, dict)


async def get_products(context: RenderContext) -> list[Product]:
    """상품 목록. 실패 또는 객체 배열이 아닌 응답이면 빈 리스트."""
    fallback: list[dict[str, Any]] = []
    result = await fetch_with_cache(
        context, PRODUCTS_KEY, "/products", fallback, check=is_product_list
    )
    return [Product.from_dict(item) for item in result.value]


async def get_about_info(context: RenderContext) -> AboutInfo:
    """About 콘텐츠. 실패 또는 객체가 아닌 응답이면 안내 문구."""
    fallback = {
        "title": "About",
        "content": "Failed to load content.",
        "lastUpdated": datetime.now(UTC).isoformat(),
    }
    result = await fetch_with_cache(context, ABOUT_KEY, "/about", fallback, check=is_about_payload)
    return AboutInfo.from_dict(result.value)
