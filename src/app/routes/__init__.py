"""
FastAPI Routes.

API 라우트 (mock backing APIs) + catch-all 문서/정적 파일 라우트
"""

from . import api, document

__all__ = ["api", "document"]
