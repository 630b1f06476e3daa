"""
LLM "브리프 분석" 응답을 표현하는 추천(Suggestion) 모델입니다.

LLM 출력에는 강제된 스키마가 없으므로, 모든 필드는 있을 수도 없을 수도 있다고 가정하고
before 검증기에서 None/문자열 숫자/리스트 등을 정리합니다.
"""

from typing import Any, Optional
from pydantic import AliasChoices, Field, field_validator

from .common import CamelModel, coerce_number


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(str(v) for v in value)
    return str(value)


class SuggestedPackage(CamelModel):
    """추천된 패키지 참조 (ID 우선, 이름 보조)."""

    package_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("packageId", "packageRef", "package_id", "id"),
    )
    name: Optional[str] = None
    cost: Optional[float] = None
    reason: str = ""

    @field_validator("package_id", "name", mode="before")
    @classmethod
    def _as_optional_text(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("cost", mode="before")
    @classmethod
    def _coerce_cost(cls, value: Any) -> Optional[float]:
        return coerce_number(value, default=None)

    @field_validator("reason", mode="before")
    @classmethod
    def _coerce_reason(cls, value: Any) -> str:
        return _as_text(value)


class SuggestedRole(CamelModel):
    """커스텀 빌드에서 추천된 역할별 시간."""

    service_name: str = Field(
        ...,
        validation_alias=AliasChoices("serviceName", "service_name", "name"),
    )
    category: Optional[str] = None
    hours: float = 0.0
    rate: Optional[float] = None
    cost: Optional[float] = None
    reasoning: str = ""

    @field_validator("hours", mode="before")
    @classmethod
    def _coerce_hours(cls, value: Any) -> float:
        hours = coerce_number(value)
        return max(hours, 0.0)

    @field_validator("rate", "cost", mode="before")
    @classmethod
    def _coerce_optional_numbers(cls, value: Any) -> Optional[float]:
        # 음수 단가/금액은 없는 값으로 보고 카탈로그 단가를 쓰게 함
        number = coerce_number(value, default=None)
        if number is None or number < 0:
            return None
        return number

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> Optional[str]:
        if not value:
            return None
        return str(value).strip().lower()

    @field_validator("reasoning", mode="before")
    @classmethod
    def _coerce_reasoning(cls, value: Any) -> str:
        return _as_text(value)


class CustomBuild(CamelModel):
    """역할 기반 커스텀 견적."""

    roles: list[SuggestedRole] = Field(default_factory=list)
    estimated_total: Optional[float] = None

    @field_validator("roles", mode="before")
    @classmethod
    def _drop_invalid_roles(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        # 서비스명이 없는 항목은 병합할 수 없으므로 버립니다.
        return [
            role for role in value
            if isinstance(role, dict)
            and (role.get("serviceName") or role.get("service_name") or role.get("name"))
        ]

    @field_validator("estimated_total", mode="before")
    @classmethod
    def _coerce_total(cls, value: Any) -> Optional[float]:
        return coerce_number(value, default=None)


class Suggestion(CamelModel):
    """
    파싱된 브리프 분석 결과.

    degraded=True 이면 JSON 파싱에 실패해 원문을 reasoning에 담은 대체 객체입니다.
    """

    use_packages: bool = False
    packages: list[SuggestedPackage] = Field(default_factory=list)
    custom_build: Optional[CustomBuild] = None
    reasoning: str = ""
    alternatives: str = ""
    suggested_total: float = 0.0
    budget_analysis: str = ""
    degraded: bool = False

    @field_validator("use_packages", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "1")
        return bool(value)

    @field_validator("packages", mode="before")
    @classmethod
    def _coerce_packages(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]

    @field_validator("custom_build", mode="before")
    @classmethod
    def _coerce_custom_build(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    @field_validator("reasoning", "alternatives", "budget_analysis", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("suggested_total", mode="before")
    @classmethod
    def _coerce_total(cls, value: Any) -> float:
        return coerce_number(value)

    @classmethod
    def degraded_from(cls, raw_text: str) -> "Suggestion":
        """파싱 실패 시 사용자가 원문을 읽을 수 있도록 만든 대체 객체."""
        return cls(
            use_packages=False,
            packages=[],
            custom_build=None,
            reasoning=raw_text or "",
            alternatives="",
            suggested_total=0.0,
            degraded=True,
        )
