"""서비스/패키지 카탈로그 조회 API (읽기 전용)."""

from typing import Optional
from fastapi import APIRouter, Depends

from app.services.catalog_store import CatalogStore, get_catalog_store

router = APIRouter()


@router.get("/services")
async def list_services(
    category: Optional[str] = None,
    catalog: CatalogStore = Depends(get_catalog_store),
) -> dict:
    """서비스 목록. category를 주면 해당 분류만 반환합니다."""
    services = catalog.get_services()
    if category:
        services = [s for s in services if s.category == category.lower()]

    return {
        "total": len(services),
        "services": [s.to_wire() for s in services],
    }


@router.get("/packages")
async def list_packages(catalog: CatalogStore = Depends(get_catalog_store)) -> dict:
    packages = catalog.get_packages()
    return {
        "total": len(packages),
        "packages": [p.to_wire() for p in packages],
    }
