"""
ID 생성: render_id

render pass마다 새로 발급 (로그 상관관계용).
"""

import uuid
from datetime import UTC, datetime


def generate_render_id() -> str:
    """
    Render ID 생성.

    고유성 보장: UUID v4
    포맷: RND-{timestamp}-{uuid[:8]}

    Returns:
        render_id 문자열
    """
    now = datetime.now(UTC)
    timestamp = now.strftime("%Y%m%d%H%M%S")
    unique = uuid.uuid4().hex[:8]

    return f"RND-{timestamp}-{unique}"
