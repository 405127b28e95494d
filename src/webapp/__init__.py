"""
Webapp layer: 렌더링 대상 SPA (라우트 테이블 + 페이지 + data service).

역할:
- 부트스트랩 (엔진이 호출)
- 페이지 마크업 (Jinja2 템플릿)
- 리소스별 Data Fetch Facade (get_products, get_about_info)
"""
