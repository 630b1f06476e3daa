"""
파일 기반 저장소 서비스입니다.
데이터베이스 대신 파일 시스템(폴더와 파일)을 사용하여 데이터를 저장하고 관리합니다.

관리하는 데이터:
1. 제안서 초안 (Proposals)
2. 작업 세션 (Sessions)
3. 생성 문서 (Documents)
4. 업로드된 파일들 (Uploads)
"""

import logging
import shutil
import aiofiles
from datetime import datetime
from pathlib import Path
from typing import Optional, TypeVar, Type
from pydantic import BaseModel

from app.config import get_settings
from app.models import Proposal, ProposalSession, GeneratedDocument, InputDocument
from app.exceptions import StorageError

logger = logging.getLogger(__name__)


T = TypeVar("T", bound=BaseModel)


class FileStorage:
    """JSON 파일 기반의 단순 저장소 클래스입니다."""

    def __init__(self, base_path: str = "data"):
        self.base_path = Path(base_path)
        self.proposals_path = self.base_path / "proposals"
        self.sessions_path = self.base_path / "sessions"
        self.documents_path = self.base_path / "documents"
        self.uploads_path = self.base_path / "uploads"

        self._ensure_directories()

    def _ensure_directories(self):
        """저장소 폴더 생성 함수"""
        for path in [
            self.proposals_path,
            self.sessions_path,
            self.documents_path,
            self.uploads_path,
        ]:
            path.mkdir(parents=True, exist_ok=True)

    # ==================== 제안서 관련 기능 ====================

    async def save_proposal(self, proposal: Proposal) -> str:
        """제안서를 파일로 저장합니다. 같은 ID가 있으면 덮어씁니다."""
        file_path = self.proposals_path / f"{proposal.id}.json"
        if file_path.exists():
            proposal.updated_at = datetime.now()
        await self._save_model(file_path, proposal)
        return proposal.id

    async def get_proposal(self, proposal_id: str) -> Optional[Proposal]:
        file_path = self.proposals_path / f"{proposal_id}.json"
        return await self._load_model(file_path, Proposal)

    async def list_proposals(
        self,
        skip: int = 0,
        limit: int = 20,
        client_name: Optional[str] = None,
    ) -> list[Proposal]:
        """
        저장된 제안서 목록을 페이지 단위로 가져옵니다.
        최신 수정된 순서대로 정렬됩니다.
        """
        proposals = []
        files = sorted(
            self.proposals_path.glob("*.json"),
            key=lambda f: f.stat().st_mtime,
            reverse=True
        )

        for file_path in files:
            proposal = await self._load_model(file_path, Proposal)
            if proposal:
                if client_name is None or proposal.client_name.lower() == client_name.lower():
                    proposals.append(proposal)

        return proposals[skip:skip + limit]

    async def delete_proposal(self, proposal_id: str) -> bool:
        file_path = self.proposals_path / f"{proposal_id}.json"
        return self._delete_file(file_path)

    # ==================== 세션 관련 기능 ====================

    async def save_session(self, session: ProposalSession) -> str:
        """세션 상태를 저장합니다."""
        file_path = self.sessions_path / f"{session.session_id}.json"
        await self._save_model(file_path, session)
        return session.session_id

    async def get_session(self, session_id: str) -> Optional[ProposalSession]:
        file_path = self.sessions_path / f"{session_id}.json"
        return await self._load_model(file_path, ProposalSession)

    async def delete_session(self, session_id: str) -> bool:
        file_path = self.sessions_path / f"{session_id}.json"
        return self._delete_file(file_path)

    # ==================== 생성 문서 관련 기능 ====================

    async def save_document(self, document: GeneratedDocument) -> str:
        file_path = self.documents_path / f"{document.id}.json"
        await self._save_model(file_path, document)
        return document.id

    async def get_document(self, document_id: str) -> Optional[GeneratedDocument]:
        file_path = self.documents_path / f"{document_id}.json"
        return await self._load_model(file_path, GeneratedDocument)

    # ==================== 파일 업로드 관련 기능 ====================

    async def save_upload(
        self,
        file_content: bytes,
        filename: str,
        document_id: str
    ) -> str:
        """
        업로드된 파일을 디스크에 저장합니다.
        문서 ID별로 별도의 폴더에 저장됩니다.
        """
        doc_dir = self.uploads_path / document_id
        doc_dir.mkdir(parents=True, exist_ok=True)

        file_path = doc_dir / filename
        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(file_content)
        except OSError as e:
            logger.error(f"업로드 저장 실패 {file_path}: {e}", exc_info=True)
            raise StorageError(
                f"Failed to store upload: {filename}",
                details={"path": str(file_path), "error": str(e)},
            )

        return str(file_path.resolve())

    async def get_upload(self, document_id: str, filename: str) -> Optional[bytes]:
        """저장된 파일의 내용을 읽어옵니다."""
        file_path = self.uploads_path / document_id / filename
        if not file_path.exists():
            return None

        async with aiofiles.open(file_path, "rb") as f:
            return await f.read()

    async def delete_upload(self, document_id: str) -> bool:
        """특정 문서와 관련된 모든 업로드 파일을 삭제합니다."""
        doc_dir = self.uploads_path / document_id
        if doc_dir.exists():
            shutil.rmtree(doc_dir)
            return True
        return False

    # ==================== 입력 문서 메타데이터 기능 ====================

    async def save_input_document(self, doc: InputDocument) -> str:
        """입력 문서의 정보(추출 텍스트 포함)를 저장합니다."""
        doc_dir = self.uploads_path / doc.id
        doc_dir.mkdir(parents=True, exist_ok=True)
        file_path = doc_dir / "metadata.json"
        await self._save_model(file_path, doc)
        return doc.id

    async def get_input_document(self, document_id: str) -> Optional[InputDocument]:
        file_path = self.uploads_path / document_id / "metadata.json"
        return await self._load_model(file_path, InputDocument)

    async def list_input_documents(self) -> list[InputDocument]:
        """업로드된 문서 목록 (최신순)."""
        documents = []
        files = sorted(
            self.uploads_path.glob("*/metadata.json"),
            key=lambda f: f.stat().st_mtime,
            reverse=True
        )
        for file_path in files:
            doc = await self._load_model(file_path, InputDocument)
            if doc:
                documents.append(doc)
        return documents

    # ==================== 내부 도우미 함수들 ====================

    async def _save_model(self, file_path: Path, model: BaseModel):
        """데이터 모델을 JSON 파일로 저장하는 공통 함수"""
        try:
            async with aiofiles.open(file_path, "w", encoding="utf-8") as f:
                await f.write(model.model_dump_json(indent=2, by_alias=True))
        except Exception as e:
            logger.error(f"파일 저장 실패 {file_path}: {e}", exc_info=True)
            raise StorageError(
                f"Failed to save file: {file_path.name}",
                details={"path": str(file_path), "error": str(e)},
            )

    async def _load_model(self, file_path: Path, model_class: Type[T]) -> Optional[T]:
        """JSON 파일을 읽어서 데이터 모델로 변환하는 공통 함수"""
        if not file_path.exists():
            return None

        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                content = await f.read()
                return model_class.model_validate_json(content)
        except Exception as e:
            logger.error(f"파일 로딩 에러 {file_path}: {e}", exc_info=True)
            return None

    def _delete_file(self, file_path: Path) -> bool:
        """파일 삭제 공통 함수"""
        if file_path.exists():
            file_path.unlink()
            return True
        return False


# 싱글톤 인스턴스 (프로그램 전체에서 공유)
_file_storage: Optional[FileStorage] = None


def get_file_storage() -> FileStorage:
    """FileStorage 인스턴스를 반환합니다."""
    global _file_storage
    if _file_storage is None:
        _file_storage = FileStorage(get_settings().data_dir)
    return _file_storage
