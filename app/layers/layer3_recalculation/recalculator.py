"""
Recalculation Engine - 제안서 금액 불변식을 유지합니다.

불변식:
- LineItem.cost == round(hours × rate, precision)
- Phase.total_cost == Σ LineItem.cost
- Proposal.subtotal == Σ Phase.total_cost, total == subtotal - discount

AI 응답이나 카탈로그에 적힌 cost/total 값은 신뢰하지 않고 항상 hours × rate 로부터 다시 계산합니다.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from app.config import get_settings
from app.exceptions import InputValidationError
from app.models import Proposal, round_currency, coerce_number

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("hours", "rate")


def _precision(precision: Optional[int]) -> int:
    return get_settings().currency_precision if precision is None else precision


def recalculate(proposal: Proposal, precision: Optional[int] = None) -> Proposal:
    """
    모든 금액을 hours × rate 로부터 다시 계산합니다. (제자리 수정 후 같은 객체 반환)

    ID, 이름, 플래그는 건드리지 않으므로 여러 번 실행해도 결과가 같습니다.
    """
    digits = _precision(precision)

    subtotal = 0.0
    for phase in proposal.phases:
        phase_total = 0.0
        for item in phase.line_items:
            item.cost = round_currency(item.hours * item.rate, digits)
            phase_total += item.cost
        phase.total_cost = round_currency(phase_total, digits)
        subtotal += phase.total_cost

    proposal.subtotal = round_currency(subtotal, digits)
    proposal.total = round_currency(proposal.subtotal - proposal.discount, digits)
    return proposal


def apply_field_edit(
    proposal: Proposal,
    phase_id: str,
    line_item_id: str,
    field: str,
    value: Any,
    precision: Optional[int] = None,
) -> Proposal:
    """
    라인 아이템의 hours 또는 rate 를 수정한 새 제안서를 반환합니다.

    - 원본 proposal은 변경되지 않습니다 (깊은 복사본에 적용).
    - (phase_id, line_item_id)가 없으면 아무것도 바꾸지 않은 복사본을 반환합니다.
      화면과 서버 상태가 어긋난 경우이므로 에러로 취급하지 않습니다.

    Raises:
        InputValidationError: field가 hours/rate가 아니거나 값이 유한한 숫자가 아니거나 음수인 경우
    """
    if field not in EDITABLE_FIELDS:
        raise InputValidationError(
            f"Field '{field}' cannot be edited",
            details={"field": field, "allowed": list(EDITABLE_FIELDS)},
        )

    number = coerce_number(value, default=None)
    if number is None:
        raise InputValidationError(
            f"Value for '{field}' must be a number",
            details={"field": field, "value": value},
        )
    if number < 0:
        raise InputValidationError(
            f"Value for '{field}' must not be negative",
            details={"field": field, "value": number},
        )

    updated = proposal.model_copy(deep=True)
    found = updated.find_line_item(phase_id, line_item_id)
    if found is None:
        logger.info(
            f"[Recalc] 대상 항목 없음, 변경 없음: phase={phase_id}, item={line_item_id}"
        )
        return updated

    _, item = found
    setattr(item, field, number)
    item.is_edited = True
    updated.updated_at = datetime.now()

    recalculate(updated, precision)
    logger.info(
        f"[Recalc] {item.name}.{field} = {number:g} → cost {item.cost:,.2f}, total {updated.total:,.2f}"
    )
    return updated
