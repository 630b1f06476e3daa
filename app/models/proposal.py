"""
제안서(Proposal) 데이터 모델입니다.

Proposal → Phase → LineItem 의 3단 구조이며, 금액 필드(cost, totalCost, subtotal, total)는
항상 hours × rate 로부터 다시 계산됩니다. (layer3_recalculation.recalculate 참고)
"""

import csv
import io
import math
from datetime import datetime
from typing import Any, Iterator, Optional
from pydantic import AliasChoices, Field, field_validator

from .common import CamelModel, coerce_number


class LineItem(CamelModel):
    """청구 가능한 최소 단위 항목."""

    id: str = Field("", description="제안서 내에서 유일하고 재계산 후에도 유지되는 ID")
    name: str = Field(..., description="서비스/항목명")
    category: Optional[str] = Field(None, description="서비스 카테고리 (커스텀 빌드)")
    hours: float = Field(0.0, ge=0, allow_inf_nan=False, description="시간 (월 단위 항목은 수량)")
    rate: float = Field(0.0, ge=0, allow_inf_nan=False, description="단가")
    cost: float = Field(0.0, ge=0, allow_inf_nan=False, description="hours × rate")
    is_edited: bool = Field(False, description="수동/프롬프트 수정 여부")
    is_optional: bool = Field(False, description="선택 항목 여부")
    reasoning: Optional[str] = Field(None, description="AI 추천 근거")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("hours", "rate", "cost", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any) -> Any:
        # NaN/inf 는 0으로 바꾸지 않고 그대로 넘겨 검증 에러로 만듦
        if isinstance(value, float) and not math.isfinite(value):
            return value
        return coerce_number(value)


class Phase(CamelModel):
    """제안서 내 단계 (카테고리 또는 패키지 단계)."""

    id: str = Field("", description="단계 ID")
    name: str = Field(..., validation_alias=AliasChoices("name", "title"))
    total_cost: float = Field(
        0.0,
        validation_alias=AliasChoices("totalCost", "total_cost", "total"),
        description="단계 합계 (라인 아이템 cost 합)",
    )
    line_items: list[LineItem] = Field(
        default_factory=list,
        validation_alias=AliasChoices("lineItems", "line_items", "items"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("total_cost", mode="before")
    @classmethod
    def _coerce_total(cls, value: Any) -> float:
        return coerce_number(value)


class ProposalContext(CamelModel):
    """제안서 분석 요청 컨텍스트 (사용자 입력)."""

    client_name: str = Field(..., description="고객사명")
    budget: float = Field(..., ge=0, description="고객 예산")
    project_type: Optional[str] = Field(None, description="프로젝트 유형")
    additional_context: Optional[str] = Field(None, description="추가 요청사항")

    @field_validator("budget", mode="before")
    @classmethod
    def _coerce_budget(cls, value: Any) -> Any:
        number = coerce_number(value, default=None)
        return value if number is None else number


class Proposal(CamelModel):
    """견적 제안서 (루트 애그리거트)."""

    id: str = Field("", description="제안서 ID (PROP-YYYYMMDD-xxxxxx)")
    client_name: str = Field("", description="고객사명")
    project_type: Optional[str] = Field(None, description="프로젝트 유형")
    budget: float = Field(0.0, description="고객 예산")
    phases: list[Phase] = Field(default_factory=list)
    subtotal: float = Field(0.0, description="모든 라인 아이템 cost 합")
    discount: float = Field(0.0, ge=0, description="할인 금액")
    total: float = Field(0.0, description="subtotal - discount")
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    @field_validator("budget", "subtotal", "discount", "total", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("client_name", mode="before")
    @classmethod
    def _coerce_client(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def iter_line_items(self) -> Iterator[tuple[Phase, LineItem]]:
        for phase in self.phases:
            for item in phase.line_items:
                yield phase, item

    @property
    def line_item_count(self) -> int:
        return sum(len(phase.line_items) for phase in self.phases)

    def find_line_item(
        self, phase_id: str, line_item_id: str
    ) -> Optional[tuple[Phase, LineItem]]:
        """(phase_id, line_item_id)로 항목을 찾습니다. 없으면 None."""
        for phase in self.phases:
            if phase.id != phase_id:
                continue
            for item in phase.line_items:
                if item.id == line_item_id:
                    return phase, item
        return None

    def to_markdown(self) -> str:
        """마크다운 형식의 견적서 생성."""
        lines = []

        lines.append(f"# Proposal: {self.client_name}")
        lines.append("")
        if self.project_type:
            lines.append(f"**Project Type**: {self.project_type}")
        lines.append(f"**Budget**: ${self.budget:,.2f}")
        lines.append(f"**Proposal ID**: {self.id}")
        lines.append(f"**Date**: {self.created_at.strftime('%Y-%m-%d')}")
        lines.append("")
        lines.append("---")
        lines.append("")

        for phase in self.phases:
            lines.append(f"## {phase.name}")
            lines.append("")
            lines.append("| Item | Hours | Rate | Cost |")
            lines.append("|------|------:|-----:|-----:|")
            for item in phase.line_items:
                name = item.name
                if item.is_optional:
                    name += " (optional)"
                if item.is_edited:
                    name += " *"
                lines.append(
                    f"| {name} | {item.hours:g} | ${item.rate:,.2f} | ${item.cost:,.2f} |"
                )
            lines.append("")
            lines.append(f"**Phase Total**: ${phase.total_cost:,.2f}")
            lines.append("")

        lines.append("---")
        lines.append("")
        lines.append(f"**Subtotal**: ${self.subtotal:,.2f}")
        if self.discount:
            lines.append(f"**Discount**: -${self.discount:,.2f}")
        lines.append(f"**Total**: ${self.total:,.2f}")
        lines.append("")

        return "\n".join(lines)

    def to_csv(self) -> str:
        """라인 아이템당 한 행의 CSV 생성 (마지막에 합계 행)."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(["Phase", "Line Item", "Hours", "Rate", "Cost", "Optional", "Edited"])
        for phase, item in self.iter_line_items():
            writer.writerow([
                phase.name,
                item.name,
                f"{item.hours:g}",
                f"{item.rate:.2f}",
                f"{item.cost:.2f}",
                "yes" if item.is_optional else "no",
                "yes" if item.is_edited else "no",
            ])
        writer.writerow([])
        writer.writerow(["Subtotal", "", "", "", f"{self.subtotal:.2f}", "", ""])
        writer.writerow(["Discount", "", "", "", f"{self.discount:.2f}", "", ""])
        writer.writerow(["Total", "", "", "", f"{self.total:.2f}", "", ""])
        return buffer.getvalue()
