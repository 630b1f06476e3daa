"""
제안서 작성 흐름 전체를 관리하는 '지휘자' 역할을 하는 오케스트레이터입니다.

처리 단계:
1. 업로드 (Upload): 파일을 검증/저장하고 텍스트를 추출합니다.
2. 분석 (Analyzing): 브리프 분석 → 추천 파싱 → 카탈로그 병합으로 제안서를 만듭니다.
3. 검토 (Review): 필드 편집 / 자연어 편집을 반복합니다.
4. 문서 (SOW Editor): SOW를 생성하고 자연어로 편집합니다.

각 단계가 끝날 때마다 세션을 저장합니다.
"""

import logging
import uuid
from typing import Any, List, Optional

from app.exceptions import InputValidationError, NotFoundError
from app.models import (
    DocumentType,
    GeneratedDocument,
    InputDocument,
    Proposal,
    ProposalContext,
    ProposalSession,
)
from app.services.catalog_store import get_catalog_store
from app.services.claude_client import get_claude_client
from app.services.file_storage import get_file_storage
from app.services.text_extractor import frame_documents, get_text_extractor
from app.utils.validation import (
    validate_analysis_inputs,
    validate_document_count,
    validate_file_extension,
    validate_file_signature,
    validate_file_size,
    validate_filename,
)
# 순환 참조를 피하기 위해 레이어 처리기는 __init__ 안에서 import 합니다.

logger = logging.getLogger(__name__)


class ProposalOrchestrator:
    """
    세션 단위로 제안서 작성 과정을 조율하는 클래스입니다.
    각 레이어의 처리기를 실행하고, 결과를 세션에 반영해 저장합니다.
    """

    def __init__(self, claude_client=None, storage=None, catalog=None, extractor=None):
        self.claude_client = claude_client or get_claude_client()
        self.storage = storage or get_file_storage()
        self.catalog = catalog or get_catalog_store()
        self.extractor = extractor or get_text_extractor()

        from app.layers.layer1_suggestion import BriefAnalyzer
        from app.layers.layer2_reconciliation import ProposalReconciler
        from app.layers.layer3_recalculation import PromptEditor
        from app.layers.layer4_documents import DocumentGenerator

        self.analyzer = BriefAnalyzer(self.claude_client)
        self.reconciler = ProposalReconciler()
        self.prompt_editor = PromptEditor(self.claude_client)
        self.document_generator = DocumentGenerator(self.claude_client)

    # ==================== 업로드 ====================

    async def ingest_upload(
        self,
        content: bytes,
        filename: str,
        content_type: Optional[str] = None,
    ) -> InputDocument:
        """파일을 검증하고 저장한 뒤 텍스트를 추출해 입력 문서 정보를 남깁니다."""
        safe_name = validate_filename(filename)
        ext = validate_file_extension(safe_name)
        validate_file_size(len(content))
        validate_file_signature(content, ext)

        doc_id = str(uuid.uuid4())[:8]
        file_path = await self.storage.save_upload(content, safe_name, doc_id)

        document = self.extractor.extract(
            content,
            safe_name,
            document_id=doc_id,
            content_type=content_type,
            source_path=file_path,
        )
        await self.storage.save_input_document(document)
        return document

    async def load_documents(self, document_ids: List[str]) -> List[InputDocument]:
        """저장된 입력 문서들을 불러옵니다. 없는 ID는 NotFoundError."""
        documents = []
        for doc_id in document_ids:
            doc = await self.storage.get_input_document(doc_id)
            if doc is None:
                raise NotFoundError(f"Document not found: {doc_id}", details={"document_id": doc_id})
            documents.append(doc)
        return documents

    # ==================== 세션 ====================

    async def get_session(self, session_id: str) -> ProposalSession:
        session = await self.storage.get_session(session_id)
        if session is None:
            raise NotFoundError(f"Session not found: {session_id}", details={"session_id": session_id})
        return session

    async def _optional_session(self, session_id: Optional[str], action: str) -> Optional[ProposalSession]:
        """세션 ID가 주어졌으면 불러와서 action이 가능한 단계인지 먼저 확인합니다."""
        if not session_id:
            return None
        session = await self.get_session(session_id)
        session.require(action)
        return session

    async def return_to_review(self, session_id: str) -> ProposalSession:
        """SOW 편집을 마치고 제안서 검토 단계로 돌아갑니다. 작성한 SOW는 세션에 남습니다."""
        session = await self.get_session(session_id)
        session.return_to_review()
        await self.storage.save_session(session)
        logger.info(f"[Orchestrator] 검토 단계로 복귀: {session.session_id}")
        return session

    async def close_session(self, session_id: str) -> ProposalSession:
        session = await self.get_session(session_id)
        session.close()
        await self.storage.save_session(session)
        logger.info(f"[Orchestrator] 세션 종료: {session.session_id}")
        return session

    # ==================== 분석 ====================

    async def analyze(
        self,
        client_name: Optional[str],
        budget: Any,
        documents: List[InputDocument],
        project_type: Optional[str] = None,
        additional_context: Optional[str] = None,
        session: Optional[ProposalSession] = None,
    ) -> ProposalSession:
        """
        업로드된 문서와 고객 정보로 추천을 받아 제안서를 만듭니다.

        고객사명/예산 검증은 외부 호출 전에 수행됩니다.
        분석 중 에러가 나면 세션은 업로드 단계로 돌아가고 에러가 그대로 전달됩니다.

        Returns:
            Review 단계의 세션 (session.proposal, session.suggestion 포함)
        """
        name, amount = validate_analysis_inputs(client_name, budget)
        validate_document_count(len(documents), required=False)

        context = ProposalContext(
            client_name=name,
            budget=amount,
            project_type=project_type or None,
            additional_context=additional_context or None,
        )

        session = session or ProposalSession()
        session.begin_analysis(context, [doc.id for doc in documents])
        session.document_names = [doc.filename for doc in documents]
        await self.storage.save_session(session)

        try:
            from app.layers.layer1_suggestion import BriefMaterials

            # ========== 1단계: 카탈로그 + 문서 텍스트 준비 ==========
            services = self.catalog.get_services()
            packages = self.catalog.get_packages()
            materials = BriefMaterials(
                documents=frame_documents(documents),
                packages=packages,
                services_by_category=self.catalog.services_by_category(),
            )
            logger.info(
                f"[Orchestrator] 분석 시작: {name}, 문서 {len(materials.documents)}/{len(documents)}개, "
                f"패키지 {len(packages)}개, 서비스 {len(services)}개"
            )

            # ========== 2단계: 브리프 분석 (AI 호출 + 파싱) ==========
            suggestion = await self.analyzer.generate(context, materials)

            # ========== 3단계: 카탈로그와 병합 ==========
            proposal = self.reconciler.reconcile(suggestion, services, packages, context)

        except Exception as e:
            # 실패 시 업로드 단계로 되돌리고 에러 메시지 저장
            session.fail_analysis(getattr(e, "message", str(e)))
            await self.storage.save_session(session)
            raise

        session.complete_analysis(suggestion, proposal)
        await self.storage.save_session(session)
        logger.info(
            f"[Orchestrator] 분석 완료: {proposal.id}, "
            f"{'packages' if suggestion.use_packages else 'custom build'}, 합계 {proposal.total:,.2f}"
        )
        return session

    # ==================== 검토 (편집) ====================

    async def edit_proposal(
        self,
        proposal: Proposal,
        instruction: str,
        session_id: Optional[str] = None,
    ) -> Proposal:
        """자연어 편집. 파싱 실패 시 ParsingError가 전달되고 세션의 제안서는 그대로입니다."""
        session = await self._optional_session(session_id, "accept_proposal")

        edited = await self.prompt_editor.generate(proposal, instruction)

        if session is not None:
            session.accept_proposal(edited)
            await self.storage.save_session(session)
        return edited

    async def edit_field(
        self,
        proposal: Proposal,
        phase_id: str,
        line_item_id: str,
        field: str,
        value: Any,
        session_id: Optional[str] = None,
    ) -> Proposal:
        """hours/rate 직접 편집 후 재계산된 제안서를 반환합니다."""
        from app.layers.layer3_recalculation import apply_field_edit

        session = await self._optional_session(session_id, "accept_proposal")
        edited = apply_field_edit(proposal, phase_id, line_item_id, field, value)

        if session is not None:
            session.accept_proposal(edited)
            await self.storage.save_session(session)
        return edited

    # ==================== 문서 ====================

    async def generate_document(
        self,
        document_type: DocumentType,
        proposal: Proposal,
        client_name: Optional[str] = None,
        budget: Optional[float] = None,
        session_id: Optional[str] = None,
    ) -> GeneratedDocument:
        """
        확정된 제안서로 SOW / Client Brief를 생성합니다.
        세션이 Review 단계에서 SOW를 만들면 SOW 편집 단계로 넘어갑니다.
        """
        from app.layers.layer4_documents import DocumentRequest

        if not document_type.from_proposal:
            raise InputValidationError(
                f"Document type '{document_type.value}' is generated from uploads",
                details={"document_type": document_type.value},
            )

        session = await self._optional_session(session_id, "accept_proposal")
        if session is not None and document_type == DocumentType.SOW:
            session.require("open_sow_editor")

        request = DocumentRequest(
            document_type=document_type,
            client_name=client_name,
            budget=budget,
            session_id=session_id,
        )
        document = await self.document_generator.generate(proposal, request)
        await self.storage.save_document(document)

        if session is not None:
            session.accept_proposal(proposal)
            if document_type == DocumentType.SOW:
                session.open_sow_editor(document.content)
            await self.storage.save_session(session)
        return document

    async def generate_from_uploads(
        self,
        document_type: DocumentType,
        documents: List[InputDocument],
        client_name: Optional[str],
        project_type: Optional[str],
        deadline,
    ) -> GeneratedDocument:
        """업로드 문서만으로 SOW / 내부 브리프 / 일정 / 킥오프 문서를 생성합니다."""
        from app.layers.layer4_documents import DocumentRequest

        if document_type.from_proposal:
            raise InputValidationError(
                f"Document type '{document_type.value}' requires a proposal",
                details={"document_type": document_type.value},
            )
        validate_document_count(len(documents), required=True)

        request = DocumentRequest(
            document_type=document_type,
            client_name=client_name,
            project_type=project_type,
            deadline=deadline,
            documents=frame_documents(documents),
        )
        document = await self.document_generator.generate(None, request)
        await self.storage.save_document(document)
        return document

    async def edit_sow(
        self,
        current_sow: str,
        instruction: str,
        session_id: Optional[str] = None,
    ) -> str:
        """SOW 자연어 편집. 세션이 있으면 SOW 편집 단계여야 합니다."""
        session = await self._optional_session(session_id, "update_sow")

        updated = await self.document_generator.edit_sow(current_sow, instruction)

        if session is not None:
            session.update_sow(updated)
            await self.storage.save_session(session)
        return updated


# 싱글톤 인스턴스
_orchestrator: Optional[ProposalOrchestrator] = None


def get_orchestrator() -> ProposalOrchestrator:
    """ProposalOrchestrator 인스턴스를 반환합니다."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ProposalOrchestrator()
    return _orchestrator
