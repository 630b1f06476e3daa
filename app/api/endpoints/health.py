"""
헬스 체크(Health Check) 엔드포인트입니다.
서버가 살아서 정상적으로 응답하는지 확인하는 용도입니다.
"""

from fastapi import APIRouter

from app.config import get_settings
from app.services.catalog_store import get_catalog_store

router = APIRouter()


@router.get("")
async def health_check():
    """
    기본 상태 확인 함수.
    서버가 켜져 있으면 {"status": "healthy"}를 반환합니다.
    """
    return {"status": "healthy"}


@router.get("/detail")
async def health_check_detail():
    """
    상세 상태 확인 함수.
    현재 설정 정보와 카탈로그 로딩 상태도 같이 보여줍니다.
    """
    settings = get_settings()
    catalog = get_catalog_store()
    return {
        "status": "healthy",
        "catalog": {
            "services": len(catalog.get_services()),
            "packages": len(catalog.get_packages()),
        },
        "config": {
            "claude_model": settings.claude_model,  # 사용 중인 AI 모델
            "agency_name": settings.agency_name,
            "currency_precision": settings.currency_precision,  # 금액 반올림 자릿수
            "api_key_configured": bool(settings.anthropic_api_key),  # API 키 설정 여부
        }
    }
