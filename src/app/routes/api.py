"""
Mock Backing APIs.

- GET /api/products → 상품 6개
- GET /api/about → About 콘텐츠
- GET /api/health → 헬스 체크

실제 운영에서는 외부 API로 대체 (api.base_url 설정).
네트워크 지연은 api.mock_latency_ms로 흉내낸다.
"""

import asyncio
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request

api_router = APIRouter()

MOCK_PRODUCTS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Hybrid Gateway",
        "description": "Serve server-rendered documents or a client shell from one entry point.",
        "price": 0,
        "category": "Framework",
    },
    {
        "id": 2,
        "name": "Server-Side Rendering",
        "description": "Improve SEO and initial load performance by rendering pages on the server.",
        "price": 0,
        "category": "Feature",
    },
    {
        "id": 3,
        "name": "Transfer State",
        "description": "Prevent duplicate API calls by transferring server-fetched data to the client.",
        "price": 0,
        "category": "Feature",
    },
    {
        "id": 4,
        "name": "Type Hints",
        "description": "Typed contexts and keys across the render and fetch layers.",
        "price": 0,
        "category": "Language",
    },
    {
        "id": 5,
        "name": "Client Forms",
        "description": "Forms render on the server and are handled entirely in the browser.",
        "price": 0,
        "category": "Feature",
    },
    {
        "id": 6,
        "name": "Route Table",
        "description": "Static path-to-page mapping with redirects for unknown paths.",
        "price": 0,
        "category": "Feature",
    },
]

ABOUT_TITLE = "About Hybrid SSR Demo"
ABOUT_CONTENT = (
    "This demo application showcases hybrid rendering: documents are rendered "
    "on the server with a transfer state the client reuses during hydration, "
    "or served as a minimal shell when server rendering is disabled."
)


async def _simulate_latency(request: Request) -> None:
    latency_ms = request.app.state.settings.mock_latency_ms
    if latency_ms > 0:
        await asyncio.sleep(latency_ms / 1000)


@api_router.get("/products")
async def list_products(request: Request) -> list[dict[str, Any]]:
    """상품 목록."""
    await _simulate_latency(request)
    return MOCK_PRODUCTS


@api_router.get("/about")
async def about_info(request: Request) -> dict[str, str]:
    """About 콘텐츠."""
    await _simulate_latency(request)
    return {
        "title": ABOUT_TITLE,
        "content": ABOUT_CONTENT,
        "lastUpdated": datetime.now(UTC).isoformat(),
    }


@api_router.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}
