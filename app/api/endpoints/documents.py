"""
문서 생성 API입니다.
확정된 제안서로 SOW/Client Brief를 만들거나, 업로드 문서만으로 내부 문서를 생성합니다.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from app.exceptions import InputValidationError, NotFoundError
from app.models import CamelModel, DocumentType, Proposal, markdown_to_word_html
from app.services.file_storage import FileStorage, get_file_storage
from app.services.orchestrator import ProposalOrchestrator, get_orchestrator
from app.utils.validation import validate_document_count

router = APIRouter()


class GenerateDocumentRequest(CamelModel):
    """제안서 기반 문서 생성 요청 (type: sow | brief)"""
    type: DocumentType
    proposal: Optional[Proposal] = None
    client_name: Optional[str] = None
    budget: Optional[float] = None
    session_id: Optional[str] = None


class EditSowRequest(CamelModel):
    current_sow: str = ""
    prompt: str = ""
    session_id: Optional[str] = None


class ExportDocumentRequest(CamelModel):
    """편집기 내용 내보내기 (format: markdown | doc)"""
    content: str
    title: str = "Statement of Work"
    format: str = "markdown"


@router.post("/generate")
async def generate_document(
    request: GenerateDocumentRequest,
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """
    제안서로부터 문서를 생성합니다.
    세션이 Review 단계일 때 SOW를 생성하면 SOW 편집 단계로 넘어갑니다.
    """
    if request.proposal is None:
        raise InputValidationError("Missing required fields: type and proposal")

    document = await orchestrator.generate_document(
        request.type,
        request.proposal,
        client_name=request.client_name,
        budget=request.budget,
        session_id=request.session_id,
    )
    return {"success": True, "content": document.content, "document": document.to_wire()}


@router.post("/edit-sow")
async def edit_sow(
    request: EditSowRequest,
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """SOW 자연어 편집. 편집된 전체 SOW를 반환합니다."""
    updated = await orchestrator.edit_sow(
        request.current_sow,
        request.prompt,
        session_id=request.session_id,
    )
    return {"success": True, "updatedSow": updated}


@router.post("/brief")
async def generate_from_uploads(
    client_name: Optional[str] = Form(None, alias="clientName"),
    project_type: Optional[str] = Form(None, alias="projectType"),
    deadline: Optional[date] = Form(None),
    document_type: DocumentType = Form(DocumentType.STATEMENT_OF_WORK, alias="documentType"),
    files: Optional[List[UploadFile]] = File(None),
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """
    업로드 문서 기반 문서 생성 API.

    documentType: statementOfWork | internalBrief | timeline | kickoffPresentation
    """
    missing = [
        name for name, value in (
            ("clientName", client_name),
            ("projectType", project_type),
            ("deadline", deadline),
        )
        if not value
    ]
    if missing:
        raise InputValidationError("Missing required fields", details={"missing": missing})

    files = files or []
    validate_document_count(len(files))

    documents = []
    for file in files:
        content = await file.read()
        documents.append(await orchestrator.ingest_upload(content, file.filename, file.content_type))

    document = await orchestrator.generate_from_uploads(
        document_type,
        documents,
        client_name=client_name,
        project_type=project_type,
        deadline=deadline,
    )
    return {
        "success": True,
        "content": document.content,
        "documentType": document.document_type.value,
        "document": document.to_wire(),
    }


@router.get("/{document_id}")
async def get_document(
    document_id: str,
    storage: FileStorage = Depends(get_file_storage),
) -> dict:
    document = await storage.get_document(document_id)
    if not document:
        raise NotFoundError(f"Document not found: {document_id}", details={"document_id": document_id})
    return document.to_wire()


@router.post("/export")
async def export_document(request: ExportDocumentRequest) -> Response:
    """
    편집한 문서를 파일로 다운로드하는 API.

    - markdown: 원문 그대로 (.md)
    - doc: Word에서 열 수 있는 HTML (.doc)
    """
    filename = request.title.replace('"', "").strip() or "document"

    if request.format == "markdown":
        return Response(
            content=request.content,
            media_type="text/markdown",
            headers={"Content-Disposition": f'attachment; filename="{filename}.md"'},
        )
    elif request.format == "doc":
        return Response(
            content=markdown_to_word_html(request.content, request.title),
            media_type="application/msword",
            headers={"Content-Disposition": f'attachment; filename="{filename}.doc"'},
        )

    raise InputValidationError(
        f"Unsupported export format: {request.format}",
        details={"allowed": ["markdown", "doc"]},
    )
