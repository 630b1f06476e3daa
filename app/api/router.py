"""
API 라우터 설정 파일입니다.
각 기능별로 나누어진 API 주소들을 하나로 모으는 역할을 합니다.
"""

from fastapi import APIRouter

from app.api.endpoints import health, uploads, catalog, proposals, documents, sessions

# 메인 API 라우터 생성
api_router = APIRouter()

# 헬스 체크 엔드포인트: 서버 상태 확인용 (/health)
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

# 업로드 엔드포인트: 브리프 파일 업로드 및 텍스트 추출 (/uploads)
api_router.include_router(
    uploads.router,
    prefix="/uploads",
    tags=["uploads"]
)

# 카탈로그 엔드포인트: 서비스/패키지 조회 (/catalog)
api_router.include_router(
    catalog.router,
    prefix="/catalog",
    tags=["catalog"]
)

# 제안서 엔드포인트: 분석, 편집, 초안 저장/내보내기 (/proposals)
api_router.include_router(
    proposals.router,
    prefix="/proposals",
    tags=["proposals"]
)

# 문서 엔드포인트: SOW/브리프 생성 및 편집 (/documents)
api_router.include_router(
    documents.router,
    prefix="/documents",
    tags=["documents"]
)

# 세션 엔드포인트: 작성 흐름 상태 조회/종료 (/sessions)
api_router.include_router(
    sessions.router,
    prefix="/sessions",
    tags=["sessions"]
)
