"""
서비스/패키지 카탈로그 모델입니다.
카탈로그는 읽기 전용이며, 제안서 병합(Reconciliation)의 원천 데이터로만 사용됩니다.
"""

from typing import Any, Optional
from pydantic import Field, field_validator

from .common import CamelModel, coerce_number


class Service(CamelModel):
    """청구 가능한 서비스(역할) 한 건."""

    service_name: str = Field(..., description="서비스명 (카테고리 내에서 유일)")
    service_code: Optional[str] = Field(None, description="서비스 코드")
    category: str = Field("other", description="카테고리 (management, creative 등)")
    default_rate: float = Field(0.0, ge=0, description="기본 단가")
    billing_unit: str = Field("hour", description="청구 단위 (hour, month 등)")

    @field_validator("default_rate", mode="before")
    @classmethod
    def _coerce_rate(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> str:
        return str(value).strip().lower() if value else "other"


class PackageLineItem(CamelModel):
    """패키지 단계에 포함된 항목."""

    name: str
    hours: Optional[float] = None
    rate: Optional[float] = None
    cost: Optional[float] = None
    is_optional: bool = False
    description: str = ""

    @field_validator("hours", "rate", "cost", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any) -> Optional[float]:
        return coerce_number(value, default=None)


class PackagePhase(CamelModel):
    """패키지 내 단계 (순서 유지)."""

    name: str
    total_cost: Optional[float] = None
    line_items: list[PackageLineItem] = Field(default_factory=list)


class Package(CamelModel):
    """미리 정의된 고정가/템플릿 패키지."""

    id: str
    name: str
    service_type: str = ""
    tier_level: Optional[str] = None
    description: str = ""
    total_cost: float = 0.0
    is_fixed_package: bool = True
    phases: list[PackagePhase] = Field(default_factory=list)

    @property
    def line_item_count(self) -> int:
        return sum(len(phase.line_items) for phase in self.phases)

    def summary(self) -> dict:
        """LLM 프롬프트에 넣을 요약 정보."""
        return {
            "packageId": self.id,
            "name": self.name,
            "type": self.service_type,
            "tier": self.tier_level,
            "cost": self.total_cost,
            "description": self.description,
            "isFixed": self.is_fixed_package,
            "phases": [
                {
                    "name": phase.name,
                    "cost": phase.total_cost,
                    "items": len(phase.line_items),
                }
                for phase in self.phases
            ],
        }
