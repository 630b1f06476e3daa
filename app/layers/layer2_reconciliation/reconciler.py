"""
Layer 2: Proposal Reconciler - Suggestion + 카탈로그 → 완전한 Proposal.

두 가지 모드:
1. 패키지 모드: 추천된 패키지를 카탈로그에서 찾아 단계/항목을 그대로 복사
2. 커스텀 빌드: 카탈로그의 모든 서비스를 0시간으로 깔고, 추천된 역할의 시간을 덮어씀
   (추천에서 빠진 서비스도 항상 제안서에 나타나 사용자가 직접 시간을 넣을 수 있음)

어느 모드든 금액은 마지막에 recalculate()로 hours × rate 에서 다시 계산됩니다.
"""

import logging
from typing import Optional

from app.config import get_settings
from app.exceptions import ReconciliationError
from app.models import (
    LineItem,
    Package,
    PackageLineItem,
    Phase,
    Proposal,
    ProposalContext,
    Service,
    SuggestedPackage,
    SuggestedRole,
    Suggestion,
)
from ..layer3_recalculation.recalculator import recalculate
from .id_allocator import IdAllocator, new_proposal_id

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "other"
AVAILABLE_REASONING = "Available for manual addition"


class _RoleEntry:
    """커스텀 빌드 작업용 서비스 항목."""

    __slots__ = ("name", "category", "rate", "hours", "reasoning")

    def __init__(self, name: str, category: str, rate: float, hours: float, reasoning: str):
        self.name = name
        self.category = category
        self.rate = rate
        self.hours = hours
        self.reasoning = reasoning


def category_title(category: str) -> str:
    """'creative' → 'Creative Services'"""
    return f"{category[:1].upper()}{category[1:]} Services"


class ProposalReconciler:
    """Suggestion과 카탈로그를 결정적으로 병합해 Proposal을 만듭니다."""

    def __init__(self, precision: Optional[int] = None):
        self.precision = get_settings().currency_precision if precision is None else precision

    def reconcile(
        self,
        suggestion: Suggestion,
        services: list[Service],
        packages: list[Package],
        context: Optional[ProposalContext] = None,
    ) -> Proposal:
        """
        선택 정책:
        - usePackages=true 이고 추천 패키지가 있으면 패키지 모드
        - 그 외에는 커스텀 빌드
        패키지가 하나도 매칭되지 않으면 단계가 없는 제안서가 됩니다 (커스텀 빌드로 전환하지 않음).
        """
        if suggestion.use_packages and suggestion.packages:
            return self.reconcile_from_packages(suggestion, packages, context)
        return self.reconcile_custom_build(suggestion, services, context)

    # ==================== 패키지 모드 ====================

    def match_packages(
        self,
        suggestion: Suggestion,
        packages: list[Package],
    ) -> tuple[list[Package], list[SuggestedPackage]]:
        """
        추천 패키지를 카탈로그 패키지와 매칭합니다.
        ID → 정확한 이름 → 대소문자 무시 이름 순으로 찾으며, 같은 패키지는 한 번만 선택합니다.

        Returns:
            (선택된 패키지 목록(추천 순서), 매칭 실패한 추천 목록)
        """
        by_id = {package.id: package for package in packages}
        by_name: dict[str, Package] = {}
        by_lower_name: dict[str, Package] = {}
        for package in packages:
            by_name.setdefault(package.name, package)
            by_lower_name.setdefault(package.name.strip().lower(), package)

        selected: list[Package] = []
        unmatched: list[SuggestedPackage] = []
        seen: set[str] = set()

        for ref in suggestion.packages:
            package = None
            if ref.package_id:
                package = by_id.get(ref.package_id)
            if package is None and ref.name:
                package = by_name.get(ref.name) or by_lower_name.get(ref.name.strip().lower())
            # 일부 응답은 packageId 자리에 패키지명을 넣음
            if package is None and ref.package_id:
                package = by_lower_name.get(ref.package_id.strip().lower())

            if package is None:
                unmatched.append(ref)
                continue
            if package.id in seen:
                continue
            seen.add(package.id)
            selected.append(package)

        return selected, unmatched

    def reconcile_from_packages(
        self,
        suggestion: Suggestion,
        packages: list[Package],
        context: Optional[ProposalContext] = None,
    ) -> Proposal:
        selected, unmatched = self.match_packages(suggestion, packages)
        for ref in unmatched:
            logger.warning(
                f"[Reconciler] 카탈로그에 없는 추천 패키지 제외: id={ref.package_id}, name={ref.name}"
            )

        allocator = IdAllocator()
        phases: list[Phase] = []
        multiple = len(selected) > 1

        for package in selected:
            for source_phase in package.phases:
                name = f"{package.name}: {source_phase.name}" if multiple else source_phase.name
                line_items = [
                    self._package_line_item(source_item, allocator)
                    for source_item in source_phase.line_items
                ]
                phases.append(Phase(id=allocator.phase_id(), name=name, line_items=line_items))

        proposal = self._new_proposal(phases, context)
        recalculate(proposal, self.precision)

        logger.info(
            f"[Reconciler] 패키지 모드: 패키지 {len(selected)}개, 단계 {len(phases)}개, "
            f"항목 {proposal.line_item_count}개, 합계 {proposal.subtotal:,.2f}"
        )
        if not selected:
            logger.warning("[Reconciler] usePackages=true 이지만 매칭된 패키지가 없어 빈 제안서를 반환합니다")
        return proposal

    def _package_line_item(self, source: PackageLineItem, allocator: IdAllocator) -> LineItem:
        """
        패키지 항목 복사.
        월/건 단위 항목(hours 없음, rate와 cost 있음)은 hours = cost / rate 로 환산합니다.
        """
        rate = source.rate
        hours = source.hours

        if rate is None and hours and source.cost is not None:
            rate = source.cost / hours
        rate = rate or 0.0

        if hours is None:
            if source.cost and not rate:
                raise ReconciliationError(
                    f"Package line item has a cost but no rate: {source.name}",
                    details={"line_item": source.name, "cost": source.cost},
                )
            hours = source.cost / rate if source.cost else 0.0

        return LineItem(
            id=allocator.item_id(),
            name=source.name,
            hours=hours,
            rate=rate,
            is_optional=source.is_optional,
            reasoning=source.description or None,
        )

    # ==================== 커스텀 빌드 ====================

    def reconcile_custom_build(
        self,
        suggestion: Suggestion,
        services: list[Service],
        context: Optional[ProposalContext] = None,
    ) -> Proposal:
        working: dict[str, list[_RoleEntry]] = {}
        for service in services:
            category = service.category or DEFAULT_CATEGORY
            working.setdefault(category, []).append(
                _RoleEntry(
                    name=service.service_name,
                    category=category,
                    rate=service.default_rate,
                    hours=0.0,
                    reasoning=AVAILABLE_REASONING,
                )
            )

        roles = suggestion.custom_build.roles if suggestion.custom_build else []
        matched = added = 0
        for role in roles:
            entry = self._find_entry(working, role)
            if entry is not None:
                entry.hours = role.hours
                if role.rate is not None:
                    entry.rate = role.rate
                entry.reasoning = role.reasoning
                matched += 1
            else:
                category = role.category or DEFAULT_CATEGORY
                working.setdefault(category, []).append(
                    _RoleEntry(
                        name=role.service_name,
                        category=category,
                        rate=self._role_rate(role),
                        hours=role.hours,
                        reasoning=role.reasoning,
                    )
                )
                added += 1
                logger.info(f"[Reconciler] 카탈로그 외 서비스 추가: {role.service_name} ({category})")

        allocator = IdAllocator()
        phases = []
        for category, entries in working.items():
            line_items = [
                LineItem(
                    id=allocator.item_id(),
                    name=entry.name,
                    category=category,
                    hours=entry.hours,
                    rate=entry.rate,
                    reasoning=entry.reasoning or None,
                )
                for entry in entries
            ]
            phases.append(
                Phase(id=allocator.phase_id(), name=category_title(category), line_items=line_items)
            )

        proposal = self._new_proposal(phases, context)
        recalculate(proposal, self.precision)

        logger.info(
            f"[Reconciler] 커스텀 빌드: 카탈로그 {len(services)}개, 추천 반영 {matched}개, "
            f"추가 {added}개, 합계 {proposal.subtotal:,.2f}"
        )
        return proposal

    def _find_entry(
        self,
        working: dict[str, list[_RoleEntry]],
        role: SuggestedRole,
    ) -> Optional[_RoleEntry]:
        """카테고리 안에서 먼저 찾고, 없으면 전체 카테고리에서 서비스명으로 찾습니다."""
        name = role.service_name.strip().lower()
        category = role.category or DEFAULT_CATEGORY

        for entry in working.get(category, []):
            if entry.name.lower() == name:
                return entry
        for entries in working.values():
            for entry in entries:
                if entry.name.lower() == name:
                    return entry
        return None

    def _role_rate(self, role: SuggestedRole) -> float:
        if role.rate is not None:
            return role.rate
        if role.cost and role.hours:
            return role.cost / role.hours
        return 0.0

    # ==================== 공통 ====================

    def _new_proposal(self, phases: list[Phase], context: Optional[ProposalContext]) -> Proposal:
        return Proposal(
            id=new_proposal_id(),
            client_name=context.client_name if context else "",
            project_type=context.project_type if context else None,
            budget=context.budget if context else 0.0,
            phases=phases,
            discount=0.0,
        )
