"""
Catch-all route: 정적 파일 / API / 문서 분기.

API 라우터보다 나중에 등록해야 한다 (등록 순서 = 매칭 순서).
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from src.app.dispatch import classify_path
from src.domain.errors import StaticAssetMissing
from src.domain.schemas import RequestKind

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{full_path:path}", include_in_schema=False)
async def dispatch_request(request: Request, full_path: str) -> Response:
    """요청 분류 후 정적 파일 서버 또는 문서 응답기로 전달."""
    kind = classify_path(request.url.path)

    if kind is RequestKind.STATIC:
        try:
            return await request.app.state.static_server.serve(request)
        except StaticAssetMissing as e:
            logger.debug(f"Static asset missing: {e}")
            raise HTTPException(status_code=404, detail="Not Found") from e

    if kind is RequestKind.API:
        raise HTTPException(status_code=404, detail="Not Found")

    result = await request.app.state.document_responder.respond(request)
    return result.response
