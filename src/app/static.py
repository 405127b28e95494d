"""
Static Asset Server: 사전 빌드된 browser 에셋 서빙.

- Starlette StaticFiles로 파일 조회 (경로 탈출 방지, 304 처리 포함)
- 장기 캐시 헤더
- 문서 경로는 절대 처리하지 않음 (분류는 dispatch에서)
"""

import os
from pathlib import Path

from fastapi import Request
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domain.constants import STATIC_CACHE_CONTROL
from src.domain.errors import ErrorCodes, StaticAssetMissing


class StaticAssetServer:
    """
    browser 에셋 루트 서빙.

    Usage:
        server = StaticAssetServer(Path("dist/browser"), max_age=31536000)
        response = await server.serve(request)
    """

    def __init__(self, root: Path, max_age: int):
        self.root = root
        self.max_age = max_age
        self._files = StaticFiles(directory=root, check_dir=False)

    @property
    def cache_control(self) -> str:
        return STATIC_CACHE_CONTROL.format(max_age=self.max_age)

    async def serve(self, request: Request) -> Response:
        """
        요청 경로의 파일 응답.

        Raises:
            StaticAssetMissing: 파일 없음
        """
        relative = os.path.normpath(os.path.join(*request.url.path.split("/")))
        try:
            response = await self._files.get_response(relative, request.scope)
        except StarletteHTTPException as e:
            if e.status_code == 404:
                raise StaticAssetMissing(
                    ErrorCodes.STATIC_ASSET_MISSING, path=request.url.path
                ) from e
            raise

        response.headers["Cache-Control"] = self.cache_control
        return response
