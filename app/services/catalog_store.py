"""
서비스/패키지 카탈로그 저장소입니다.

카탈로그는 {"services": [...], "packages": [...]} 형식의 JSON 파일에서 읽어오며,
한 번 로딩한 뒤에는 읽기 전용으로 사용합니다.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from app.config import get_settings
from app.exceptions import CatalogError
from app.models import Service, Package

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog.json"


class CatalogStore:
    """파일 기반 읽기 전용 카탈로그."""

    def __init__(self, catalog_path: Optional[str] = None):
        self.catalog_path = Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH
        self._services: Optional[list[Service]] = None
        self._packages: Optional[list[Package]] = None

    def _load(self):
        if self._services is not None:
            return

        if not self.catalog_path.exists():
            raise CatalogError(
                f"Catalog file not found: {self.catalog_path}",
                details={"path": str(self.catalog_path)},
            )

        try:
            with open(self.catalog_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(
                f"Failed to read catalog: {e}",
                details={"path": str(self.catalog_path)},
            ) from e

        if not isinstance(raw, dict):
            raise CatalogError("Catalog must be a JSON object with services and packages")

        try:
            services = [Service.model_validate(row) for row in raw.get("services", [])]
            packages = [Package.model_validate(row) for row in raw.get("packages", [])]
        except ValidationError as e:
            raise CatalogError(
                "Catalog contains invalid entries",
                details={"errors": e.errors(include_url=False)},
            ) from e

        self._services = services
        self._packages = packages
        logger.info(
            f"[Catalog] 로딩 완료: 서비스 {len(services)}개, 패키지 {len(packages)}개"
        )

    def get_services(self) -> list[Service]:
        """전체 서비스 목록 (카탈로그 순서)."""
        self._load()
        return list(self._services)

    def get_packages(self) -> list[Package]:
        """전체 패키지 목록 (카탈로그 순서)."""
        self._load()
        return list(self._packages)

    def services_by_category(self) -> dict[str, list[Service]]:
        """카테고리별 서비스 목록. 카테고리 순서는 카탈로그에 처음 나온 순서."""
        grouped: dict[str, list[Service]] = {}
        for service in self.get_services():
            grouped.setdefault(service.category, []).append(service)
        return grouped

    def find_package(self, ref: Optional[str]) -> Optional[Package]:
        """ID → 정확한 이름 → 대소문자 무시 이름 순으로 패키지를 찾습니다."""
        if not ref:
            return None
        packages = self.get_packages()
        for package in packages:
            if package.id == ref:
                return package
        for package in packages:
            if package.name == ref:
                return package
        lowered = ref.strip().lower()
        for package in packages:
            if package.name.lower() == lowered:
                return package
        return None


_catalog_store: Optional[CatalogStore] = None


def get_catalog_store() -> CatalogStore:
    """CatalogStore 싱글톤을 반환합니다."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = CatalogStore(get_settings().catalog_path)
    return _catalog_store
