"""
브리프 파일 업로드 및 관리 API입니다.
업로드 시 텍스트를 바로 추출해 두고, 분석 요청에서는 문서 ID로 참조합니다.
"""

from typing import List
from fastapi import APIRouter, Depends, UploadFile, File

from app.exceptions import NotFoundError
from app.services.file_storage import FileStorage, get_file_storage
from app.services.orchestrator import ProposalOrchestrator, get_orchestrator
from app.utils.validation import validate_document_count, validate_file_size

router = APIRouter()


def _summary(doc) -> dict:
    return {
        "id": doc.id,
        "filename": doc.filename,
        "inputType": doc.input_type.value,
        "sizeBytes": doc.metadata.size_bytes,
        "hasText": doc.has_text,
        "uploadedAt": doc.uploaded_at.isoformat(),
    }


@router.post("/upload")
async def upload_documents(
    files: List[UploadFile] = File(...),
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """
    파일 업로드 API.
    한 번에 여러 개의 파일을 업로드할 수 있습니다.

    지원 형식: txt, md, pdf, docx (doc은 저장만 되고 텍스트는 추출되지 않음)
    """
    validate_document_count(len(files))

    contents = [await file.read() for file in files]
    validate_file_size(0, total_size=sum(len(c) for c in contents))

    uploaded = []
    for file, content in zip(files, contents):
        doc = await orchestrator.ingest_upload(content, file.filename, file.content_type)
        uploaded.append(_summary(doc))

    return {
        "message": f"Uploaded {len(uploaded)} file(s)",
        "documents": uploaded,
    }


@router.get("")
async def list_uploads(
    skip: int = 0,
    limit: int = 20,
    storage: FileStorage = Depends(get_file_storage),
) -> dict:
    """업로드 문서 목록 (최신순, 페이지네이션 지원)"""
    docs = await storage.list_input_documents()
    return {
        "total": len(docs),
        "documents": [_summary(doc) for doc in docs[skip:skip + limit]],
    }


@router.get("/{document_id}")
async def get_upload(
    document_id: str,
    storage: FileStorage = Depends(get_file_storage),
) -> dict:
    """문서 정보와 추출된 텍스트를 조회합니다."""
    doc = await storage.get_input_document(document_id)
    if not doc:
        raise NotFoundError(f"Document not found: {document_id}", details={"document_id": document_id})

    return {**_summary(doc), "extractedText": doc.extracted_text}


@router.delete("/{document_id}")
async def delete_upload(
    document_id: str,
    storage: FileStorage = Depends(get_file_storage),
) -> dict:
    deleted = await storage.delete_upload(document_id)
    if not deleted:
        raise NotFoundError(f"Document not found: {document_id}", details={"document_id": document_id})

    return {"message": "Document deleted", "id": document_id}
