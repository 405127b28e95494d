"""
SSR 문서 조립: Jinja2 기반.

- <app-root data-render="server"> 에 애플리케이션 마크업 삽입
- <base href> 설정
- transfer state를 <script type="application/json"> 으로 삽입
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from src.core.transfer_state import TransferState
from src.domain.constants import TRANSFER_STATE_SCRIPT_ID

TEMPLATES_DIR = Path(__file__).parent / "templates"
DOCUMENT_TEMPLATE = "document.html"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def build_document(
    app_markup: str,
    state: TransferState,
    title: str,
    base_href: str = "/",
) -> str:
    """
    최종 HTML 문서 생성.

    Args:
        app_markup: 부트스트랩이 만든 애플리케이션 루트 내부 마크업 (신뢰된 HTML)
        state: 이번 render pass의 transfer state
        title: 문서 제목
        base_href: <base href> 값

    Returns:
        완성된 HTML 문서
    """
    template = _env.get_template(DOCUMENT_TEMPLATE)
    return template.render(
        title=title,
        base_href=base_href,
        app_markup=Markup(app_markup),
        state_script_id=TRANSFER_STATE_SCRIPT_ID,
        state_json=Markup(state.to_json()),
    )
