"""
제안서 API입니다.
브리프 분석으로 제안서를 만들고, 편집(자연어/필드)하고, 초안을 저장/내보내기 합니다.

제안서는 요청마다 통째로 주고받습니다. 서버는 세션의 마지막 수락 상태와 저장된 초안만 보관합니다.
"""

import logging
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from app.exceptions import InputValidationError, NotFoundError
from app.layers.layer2_reconciliation import ensure_ids, new_proposal_id
from app.layers.layer3_recalculation import recalculate
from app.models import CamelModel, Proposal
from app.services.file_storage import FileStorage, get_file_storage
from app.services.orchestrator import ProposalOrchestrator, get_orchestrator
from app.utils.validation import validate_analysis_inputs, validate_document_count

logger = logging.getLogger(__name__)

router = APIRouter()


class EditProposalRequest(CamelModel):
    """자연어 편집 요청"""
    prompt: str = ""
    current_proposal: Optional[Proposal] = None
    session_id: Optional[str] = None


class FieldEditRequest(CamelModel):
    """hours / rate 직접 편집 요청"""
    proposal: Proposal
    phase_id: str
    line_item_id: str
    field: str
    value: Any = None
    session_id: Optional[str] = None


@router.post("/analyze")
async def analyze_brief(
    client_name: Optional[str] = Form(None, alias="clientName"),
    budget: Optional[str] = Form(None),
    project_type: Optional[str] = Form(None, alias="projectType"),
    additional_context: Optional[str] = Form(None, alias="additionalContext"),
    document_ids: Optional[List[str]] = Form(None, alias="documentIds"),
    files: Optional[List[UploadFile]] = File(None),
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """
    브리프 분석 API.

    파일을 바로 올리거나(files), 미리 업로드한 문서 ID(documentIds)를 지정할 수 있습니다.
    고객사명과 예산은 필수이며, AI 호출 전에 검증됩니다.
    """
    validate_analysis_inputs(client_name, budget)

    files = files or []
    ids = [doc_id for value in (document_ids or []) for doc_id in value.split(",") if doc_id.strip()]
    validate_document_count(len(files) + len(ids), required=False)

    documents = await orchestrator.load_documents([doc_id.strip() for doc_id in ids])
    for file in files:
        content = await file.read()
        documents.append(await orchestrator.ingest_upload(content, file.filename, file.content_type))

    session = await orchestrator.analyze(
        client_name=client_name,
        budget=budget,
        documents=documents,
        project_type=project_type,
        additional_context=additional_context,
    )

    return {
        "success": True,
        "sessionId": session.session_id,
        "suggestions": session.suggestion.to_wire(),
        "proposal": session.proposal.to_wire(),
    }


@router.post("/edit")
async def edit_proposal(
    request: EditProposalRequest,
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """자연어 편집 API. AI 응답을 해석할 수 없으면 502와 함께 원본은 그대로 유지됩니다."""
    if not request.prompt.strip() or request.current_proposal is None:
        raise InputValidationError("Missing required fields: prompt and currentProposal")

    proposal = await orchestrator.edit_proposal(
        request.current_proposal,
        request.prompt,
        session_id=request.session_id,
    )
    return {"success": True, "proposal": proposal.to_wire()}


@router.post("/field-edit")
async def edit_field(
    request: FieldEditRequest,
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """hours / rate 편집 후 재계산된 제안서를 반환합니다. 없는 항목이면 변경 없이 반환됩니다."""
    proposal = await orchestrator.edit_field(
        request.proposal,
        request.phase_id,
        request.line_item_id,
        request.field,
        request.value,
        session_id=request.session_id,
    )
    return {"success": True, "proposal": proposal.to_wire()}


@router.post("/save")
async def save_proposal(
    proposal: Proposal,
    storage: FileStorage = Depends(get_file_storage),
) -> dict:
    """제안서 초안 저장 (같은 ID면 덮어쓰기)"""
    if not proposal.id:
        proposal.id = new_proposal_id()
    ensure_ids(proposal)
    recalculate(proposal)

    await storage.save_proposal(proposal)
    logger.info(f"[Proposals] 초안 저장: {proposal.id}")
    return {"success": True, "id": proposal.id, "proposal": proposal.to_wire()}


@router.get("")
async def list_proposals(
    skip: int = 0,
    limit: int = 20,
    client_name: Optional[str] = None,
    storage: FileStorage = Depends(get_file_storage),
) -> dict:
    """저장된 초안 목록 (최근 수정순)"""
    proposals = await storage.list_proposals(skip=skip, limit=limit, client_name=client_name)

    return {
        "total": len(proposals),
        "proposals": [
            {
                "id": p.id,
                "clientName": p.client_name,
                "projectType": p.project_type,
                "total": p.total,
                "phaseCount": len(p.phases),
                "lineItemCount": p.line_item_count,
                "createdAt": p.created_at.isoformat(),
                "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
            }
            for p in proposals
        ],
    }


async def _load_proposal(storage: FileStorage, proposal_id: str) -> Proposal:
    proposal = await storage.get_proposal(proposal_id)
    if not proposal:
        raise NotFoundError(f"Proposal not found: {proposal_id}", details={"proposal_id": proposal_id})
    return proposal


@router.get("/{proposal_id}")
async def get_proposal(
    proposal_id: str,
    storage: FileStorage = Depends(get_file_storage),
) -> dict:
    proposal = await _load_proposal(storage, proposal_id)
    return proposal.to_wire()


@router.get("/{proposal_id}/export")
async def export_proposal(
    proposal_id: str,
    format: str = "json",
    storage: FileStorage = Depends(get_file_storage),
) -> Response:
    """
    제안서를 파일로 다운로드하는 API.

    지원하는 형식:
    - json: 데이터 원본 (.json)
    - markdown: 견적 표 (.md)
    - csv: 라인 아이템별 행 (.csv)
    """
    proposal = await _load_proposal(storage, proposal_id)

    if format == "json":
        content = proposal.model_dump_json(indent=2, by_alias=True)
        media_type, ext = "application/json", "json"
    elif format == "markdown":
        content = proposal.to_markdown()
        media_type, ext = "text/markdown", "md"
    elif format == "csv":
        content = proposal.to_csv()
        media_type, ext = "text/csv", "csv"
    else:
        raise InputValidationError(
            f"Unsupported export format: {format}",
            details={"allowed": ["json", "markdown", "csv"]},
        )

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{proposal.id}.{ext}"'},
    )


@router.delete("/{proposal_id}")
async def delete_proposal(
    proposal_id: str,
    storage: FileStorage = Depends(get_file_storage),
) -> dict:
    deleted = await storage.delete_proposal(proposal_id)
    if not deleted:
        raise NotFoundError(f"Proposal not found: {proposal_id}", details={"proposal_id": proposal_id})

    return {"message": "Proposal deleted", "id": proposal_id}
