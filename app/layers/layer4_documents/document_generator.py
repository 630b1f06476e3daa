"""
Layer 4: Document Assembler - 확정된 제안서 또는 업로드 문서로부터 문서를 생성합니다.

문서 종류:
- 제안서 기반: sow (Statement of Work), brief (Client Brief)
- 업로드 기반: statementOfWork, internalBrief, timeline, kickoffPresentation
- SOW 자연어 편집: edit_sow()
"""

import logging
from datetime import date
from typing import Optional

from pydantic import Field

from app.config import get_settings
from app.exceptions import GenerationError, InputValidationError
from app.models import (
    CamelModel,
    DOCUMENT_TITLES,
    DocumentType,
    GeneratedDocument,
    Proposal,
    Service,
)
from app.services.catalog_store import get_catalog_store
from ..base_generator import BaseGenerator
from .prompts.document_prompts import (
    BRIEF_FROM_PROPOSAL_PROMPT,
    EDIT_SOW_PROMPT,
    EDIT_SOW_SYSTEM_PROMPT,
    INTERNAL_BRIEF_PROMPT,
    KICKOFF_PRESENTATION_PROMPT,
    PROPOSAL_SUMMARY_TEMPLATE,
    PROPOSAL_WRITER_PROMPT,
    SOW_FROM_PROPOSAL_PROMPT,
    STATEMENT_OF_WORK_PROMPT,
    TIMELINE_PROMPT,
    UPLOAD_BASE_CONTEXT,
    UPLOAD_SYSTEM_PROMPT,
)

logger = logging.getLogger(__name__)

# 업로드 기반 문서: (프롬프트, 최대 토큰)
UPLOAD_DOCUMENT_PROMPTS = {
    DocumentType.STATEMENT_OF_WORK: (STATEMENT_OF_WORK_PROMPT, 4000),
    DocumentType.INTERNAL_BRIEF: (INTERNAL_BRIEF_PROMPT, 2000),
    DocumentType.TIMELINE: (TIMELINE_PROMPT, 1500),
    DocumentType.KICKOFF_PRESENTATION: (KICKOFF_PRESENTATION_PROMPT, 1500),
}


class DocumentRequest(CamelModel):
    """문서 생성 요청."""

    document_type: DocumentType
    client_name: Optional[str] = None
    budget: Optional[float] = None
    project_type: Optional[str] = None
    deadline: Optional[date] = None
    documents: list[str] = Field(default_factory=list, description="'--- 파일명 ---' 형식 문서 텍스트")
    session_id: Optional[str] = None


def format_deadline(value: date) -> str:
    """date → 'March 15, 2025'"""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def build_proposal_summary(
    proposal: Proposal,
    client_name: Optional[str] = None,
    budget: Optional[float] = None,
) -> str:
    """문서 프롬프트용 제안서 요약 (고객사, 예산, 합계, 단계별 내역)."""
    phase_blocks = []
    for phase in proposal.phases:
        lines = [f"{phase.name} - ${phase.total_cost:,.2f}"]
        for item in phase.line_items:
            lines.append(
                f"  • {item.name}: {item.hours:g}h @ ${item.rate:,.2f}/hr = ${item.cost:,.2f}"
            )
        phase_blocks.append("\n".join(lines))

    budget_value = budget if budget is not None else proposal.budget
    return PROPOSAL_SUMMARY_TEMPLATE.format(
        client_name=client_name or proposal.client_name or "Not specified",
        budget=f"${budget_value:,.0f}" if budget_value else "Not specified",
        total=proposal.total,
        phases="\n\n".join(phase_blocks) if phase_blocks else "(no phases)",
    )


class DocumentGenerator(BaseGenerator[Optional[Proposal], GeneratedDocument, DocumentRequest]):
    """SOW / Brief / Timeline / Kickoff 문서 생성기."""

    _id_prefix = "DOC"
    _generator_name = "DocumentGenerator"

    def __init__(self, claude_client=None, services: Optional[list[Service]] = None):
        super().__init__(claude_client)
        self._services = services

    def _describe(self, input_doc) -> str:
        if input_doc is None:
            return "upload documents"
        return super()._describe(input_doc)

    async def _do_generate(
        self,
        input_doc: Optional[Proposal],
        context: DocumentRequest,
    ) -> GeneratedDocument:
        settings = get_settings()

        if context.document_type.from_proposal:
            system_prompt, user_prompt, max_tokens = self._proposal_prompts(input_doc, context)
        else:
            system_prompt, user_prompt, max_tokens = self._upload_prompts(context)

        content = await self._call_claude_text(
            system_prompt=system_prompt.format(agency_name=settings.agency_name),
            user_prompt=user_prompt,
            max_tokens=max_tokens,
            temperature=0.4,
            section_name=context.document_type.value,
        )
        if not content:
            raise GenerationError(
                f"No content was generated for {context.document_type.value}",
                details={"document_type": context.document_type.value},
            )

        return GeneratedDocument(
            id=self._generate_id(),
            document_type=context.document_type,
            title=DOCUMENT_TITLES[context.document_type],
            content=content,
            client_name=context.client_name or (input_doc.client_name if input_doc else None),
            proposal_id=input_doc.id if input_doc else None,
            session_id=context.session_id,
        )

    def _proposal_prompts(
        self,
        proposal: Optional[Proposal],
        request: DocumentRequest,
    ) -> tuple[str, str, int]:
        if proposal is None:
            raise InputValidationError(
                f"A proposal is required to generate {request.document_type.value}",
            )
        summary = build_proposal_summary(proposal, request.client_name, request.budget)
        template = (
            SOW_FROM_PROPOSAL_PROMPT
            if request.document_type == DocumentType.SOW
            else BRIEF_FROM_PROPOSAL_PROMPT
        )
        return PROPOSAL_WRITER_PROMPT, template.format(summary=summary), get_settings().llm_max_tokens

    def _upload_prompts(self, request: DocumentRequest) -> tuple[str, str, int]:
        missing = [
            name for name, value in (
                ("clientName", request.client_name),
                ("projectType", request.project_type),
                ("deadline", request.deadline),
            )
            if not value
        ]
        if missing:
            raise InputValidationError("Missing required fields", details={"missing": missing})
        if not request.documents:
            raise InputValidationError("Could not extract text from any uploaded files")

        settings = get_settings()
        deadline = format_deadline(request.deadline)
        base_context = UPLOAD_BASE_CONTEXT.format(
            documents="\n\n".join(request.documents),
            client_name=request.client_name,
            project_type=request.project_type,
            deadline=deadline,
            rates=self._rate_lines(),
        )
        template, max_tokens = UPLOAD_DOCUMENT_PROMPTS[request.document_type]
        prompt = template.format(
            base_context=base_context,
            client_name=request.client_name,
            project_type=request.project_type,
            deadline=deadline,
            agency_name=settings.agency_name,
        )
        return UPLOAD_SYSTEM_PROMPT, prompt, max_tokens

    def _rate_lines(self) -> str:
        if self._services is None:
            self._services = get_catalog_store().get_services()
        return "\n".join(
            f"- {service.service_name}: ${service.default_rate:g}/{service.billing_unit}"
            for service in self._services
        )

    async def edit_sow(self, current_sow: str, instruction: str) -> str:
        """SOW에 자연어 편집을 적용한 전체 문서를 반환합니다."""
        if not (current_sow or "").strip() or not (instruction or "").strip():
            raise InputValidationError("Missing required fields: currentSow and prompt")

        settings = get_settings()
        logger.info(f"[{self._generator_name}] SOW 편집 시작: {len(current_sow)} chars")
        content = await self._call_claude_text(
            system_prompt=EDIT_SOW_SYSTEM_PROMPT.format(agency_name=settings.agency_name),
            user_prompt=EDIT_SOW_PROMPT.format(current_sow=current_sow, instruction=instruction),
            max_tokens=settings.llm_max_tokens,
            temperature=0.3,
            section_name="edit_sow",
        )
        if not content:
            raise GenerationError("No content was returned for the SOW edit")
        return content
