"""
App layer: HTTP 게이트웨이 (FastAPI).

역할:
- 요청 분류 (static / api / document)
- 렌더 모드 결정, SSR 또는 CSR 셸 응답
- mock backing API, 설정 로드

주의: 폴더 구분
- src/render/templates/ → SSR 문서 템플릿
- src/webapp/templates/ → 애플리케이션 페이지 템플릿
- dist/browser/ (루트) → 사전 빌드된 browser 에셋 + CSR 셸
"""
