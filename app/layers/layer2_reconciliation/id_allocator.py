"""
제안서 엔티티 ID 할당.

ID는 생성 시점에 한 번 부여되어 엔티티에 저장되며, 위치(인덱스)로부터 다시 만들지 않습니다.
- 제안서: PROP-YYYYMMDD-xxxxxx
- 단계:   phase-xxxxxxxx
- 항목:   item-xxxxxxxx
"""

import uuid
from datetime import datetime
from typing import Iterable, Optional

from app.models import Proposal


def new_proposal_id(prefix: str = "PROP") -> str:
    date_part = datetime.now().strftime('%Y%m%d')
    return f"{prefix}-{date_part}-{uuid.uuid4().hex[:6]}"


class IdAllocator:
    """하나의 제안서 범위에서 중복 없는 단계/항목 ID를 발급합니다."""

    def __init__(self, reserved: Optional[Iterable[str]] = None):
        self._used: set[str] = set(reserved or ())

    def _allocate(self, prefix: str) -> str:
        while True:
            candidate = f"{prefix}-{uuid.uuid4().hex[:8]}"
            if candidate not in self._used:
                self._used.add(candidate)
                return candidate

    def phase_id(self) -> str:
        return self._allocate("phase")

    def item_id(self) -> str:
        return self._allocate("item")

    def claim(self, value: str) -> bool:
        """기존 ID를 사용 처리합니다. 비어 있거나 이미 사용 중이면 False."""
        if not value or value in self._used:
            return False
        self._used.add(value)
        return True


def ensure_ids(proposal: Proposal) -> Proposal:
    """
    빠졌거나 중복된 단계/항목 ID를 새로 발급합니다. (제자리 수정)
    이미 유일한 ID는 그대로 유지됩니다.
    """
    allocator = IdAllocator()
    for phase in proposal.phases:
        if not allocator.claim(phase.id):
            phase.id = allocator.phase_id()
        for item in phase.line_items:
            if not allocator.claim(item.id):
                item.id = allocator.item_id()
    if not proposal.id:
        proposal.id = new_proposal_id()
    return proposal
