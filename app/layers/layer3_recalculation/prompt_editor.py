"""
Prompt Editor - 자연어 편집 요청을 AI에 보내 제안서 전체를 다시 받습니다.

받은 제안서는 그대로 신뢰하지 않습니다:
- 제안서 ID, 고객사, 프로젝트 유형, 예산은 이전 값 유지
- 빠지거나 중복된 단계/항목 ID는 새로 발급
- 모든 금액은 hours × rate 로 다시 계산
- isEdited는 AI 표시 또는 hours/rate 변경 여부로 결정

응답을 파싱할 수 없으면 ParsingError를 발생시키며, 입력 제안서는 변경되지 않습니다.
"""

import json
import logging
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from app.config import get_settings
from app.exceptions import InputValidationError, ParsingError
from app.models import Proposal
from app.utils.json_extraction import extract_json_object
from ..base_generator import BaseGenerator
from ..layer2_reconciliation.id_allocator import ensure_ids
from .prompts.edit_prompts import EDIT_PROPOSAL_SYSTEM_PROMPT, EDIT_PROPOSAL_TASK_PROMPT
from .recalculator import recalculate

logger = logging.getLogger(__name__)


class PromptEditor(BaseGenerator[Proposal, Proposal, str]):
    """자연어 편집 요청 처리기."""

    _id_prefix = "PROP"
    _generator_name = "PromptEditor"

    async def _do_generate(self, input_doc: Proposal, context: str) -> Proposal:
        instruction = (context or "").strip()
        if not instruction:
            raise InputValidationError("Edit prompt is required")

        current = input_doc.to_wire()
        user_prompt = f"""CURRENT PROPOSAL:
{json.dumps(current, indent=2)}

USER'S EDIT REQUEST:
"{instruction}"

{EDIT_PROPOSAL_TASK_PROMPT}"""

        raw_text = await self._call_claude_text(
            system_prompt=EDIT_PROPOSAL_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_tokens=get_settings().llm_max_tokens,
            temperature=0.2,
            section_name="edit",
        )

        edited = self._parse_response(raw_text)
        return self._merge(input_doc, edited)

    def _parse_response(self, raw_text: str) -> Proposal:
        data = extract_json_object(raw_text)
        if data is None:
            logger.warning("[PromptEditor] 응답에서 JSON을 찾지 못함")
            raise ParsingError(
                "Failed to parse edit response",
                details={"response_preview": (raw_text or "")[:500]},
            )

        # {"proposal": {...}} 형태로 감싼 응답 허용
        if "phases" not in data and isinstance(data.get("proposal"), dict):
            data = data["proposal"]

        if not isinstance(data.get("phases"), list):
            raise ParsingError(
                "Edit response does not contain a proposal with phases",
                details={"keys": sorted(data.keys())},
            )

        # 타임스탬프는 이전 제안서 값을 사용하므로 응답 값은 버림
        data = {
            key: value for key, value in data.items()
            if key not in ("createdAt", "created_at", "updatedAt", "updated_at")
        }

        try:
            return Proposal.model_validate(data)
        except ValidationError as e:
            logger.warning(f"[PromptEditor] 제안서 스키마 검증 실패: {e.error_count()}건")
            raise ParsingError(
                "Edit response is not a valid proposal",
                details={"errors": e.errors(include_url=False, include_input=False, include_context=False)},
            ) from e

    def _merge(self, previous: Proposal, edited: Proposal) -> Proposal:
        """AI가 돌려준 제안서를 이전 제안서 기준으로 정리합니다. previous는 수정하지 않습니다."""
        edited.id = previous.id
        edited.client_name = previous.client_name
        edited.project_type = previous.project_type
        edited.budget = previous.budget
        edited.created_at = previous.created_at

        ensure_ids(edited)

        prior_items = {item.id: item for _, item in previous.iter_line_items()}
        for _, item in edited.iter_line_items():
            prior = prior_items.get(item.id)
            if prior is None:
                # 편집으로 새로 생긴 항목
                item.is_edited = True
            elif prior.is_edited or prior.hours != item.hours or prior.rate != item.rate:
                item.is_edited = True

        edited.updated_at = datetime.now()
        recalculate(edited)

        logger.info(
            f"[PromptEditor] 편집 반영: 단계 {len(edited.phases)}개, 항목 {edited.line_item_count}개, "
            f"합계 {previous.total:,.2f} → {edited.total:,.2f}"
        )
        return edited


async def apply_prompt_edit(
    proposal: Proposal,
    instruction: str,
    editor: Optional[PromptEditor] = None,
) -> Proposal:
    """자연어 편집을 적용한 새 제안서를 반환합니다. 실패 시 원본은 그대로입니다."""
    editor = editor or PromptEditor()
    return await editor.generate(proposal, instruction)
