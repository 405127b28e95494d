"""
Render layer: SSR 문서 생성.

역할:
- URL + 부트스트랩 → HTML 문서
- Jinja2 (문서 템플릿)
"""

from .document import build_document
from .engine import Bootstrap, RenderEngine, RenderOutcome

__all__ = [
    "build_document",
    "Bootstrap",
    "RenderEngine",
    "RenderOutcome",
]
