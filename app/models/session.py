"""
제안서 작성 세션(워크플로우) 모델입니다.

Upload → Analyzing → Review ⇄ (편집 반복) → SOW Editor 흐름을 표현하며,
허용되지 않는 전이는 WorkflowError를 발생시킵니다.
"""

from enum import Enum
from datetime import datetime
from typing import Optional
from pydantic import Field
import uuid

from app.exceptions import WorkflowError
from .common import CamelModel
from .proposal import Proposal, ProposalContext
from .suggestion import Suggestion


class WorkflowStep(str, Enum):
    """세션 진행 단계입니다."""

    UPLOAD = "upload"          # 입력 수집 중
    ANALYZING = "analyzing"    # AI 분석 요청 진행 중
    REVIEW = "review"          # 제안서 검토/편집 중
    SOW_EDITOR = "sow_editor"  # SOW 문서 편집 중
    CLOSED = "closed"          # 저장/내보내기 후 종료


# 동작별로 허용되는 시작 단계
ALLOWED_STEPS: dict[str, tuple[WorkflowStep, ...]] = {
    "begin_analysis": (WorkflowStep.UPLOAD,),
    "complete_analysis": (WorkflowStep.ANALYZING,),
    "fail_analysis": (WorkflowStep.ANALYZING,),
    "accept_proposal": (WorkflowStep.REVIEW,),
    "open_sow_editor": (WorkflowStep.REVIEW,),
    "update_sow": (WorkflowStep.SOW_EDITOR,),
    "return_to_review": (WorkflowStep.SOW_EDITOR,),
    "close": (WorkflowStep.REVIEW, WorkflowStep.SOW_EDITOR),
}


class StepChange(CamelModel):
    """단계 전이 기록."""

    from_step: WorkflowStep
    to_step: WorkflowStep
    action: str
    at: datetime = Field(default_factory=datetime.now)


class ProposalSession(CamelModel):
    """
    하나의 고객 제안 작업을 나타내는 세션입니다.
    제안서는 요청마다 통째로 주고받으므로, 세션은 마지막으로 수락된 상태만 보관합니다.
    """

    session_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="세션 고유 ID",
    )
    step: WorkflowStep = WorkflowStep.UPLOAD
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    # 입력 정보
    context: Optional[ProposalContext] = None
    document_ids: list[str] = Field(default_factory=list)
    document_names: list[str] = Field(default_factory=list)

    # 결과물
    suggestion: Optional[Suggestion] = None
    proposal: Optional[Proposal] = None
    sow: Optional[str] = None

    # 에러 관리
    error_message: Optional[str] = None
    history: list[StepChange] = Field(default_factory=list)

    def require(self, action: str):
        """현재 단계에서 action이 허용되지 않으면 WorkflowError를 발생시킵니다."""
        allowed = ALLOWED_STEPS[action]
        if self.step not in allowed:
            raise WorkflowError(
                f"'{action}' is not allowed in step '{self.step.value}'",
                details={
                    "session_id": self.session_id,
                    "step": self.step.value,
                    "allowed": [s.value for s in allowed],
                },
            )

    def _move(self, action: str, to_step: WorkflowStep):
        self.history.append(StepChange(from_step=self.step, to_step=to_step, action=action))
        self.step = to_step
        self.updated_at = datetime.now()

    def begin_analysis(self, context: ProposalContext, document_ids: Optional[list[str]] = None):
        """고객사명과 예산이 모두 있어야 분석을 시작할 수 있습니다."""
        self.require("begin_analysis")
        if not context.client_name or not context.client_name.strip():
            raise WorkflowError("Client name is required before analysis")
        if context.budget is None or context.budget <= 0:
            raise WorkflowError("Budget is required before analysis")

        self.context = context
        if document_ids is not None:
            self.document_ids = list(document_ids)
        self.error_message = None
        self._move("begin_analysis", WorkflowStep.ANALYZING)

    def complete_analysis(self, suggestion: Suggestion, proposal: Proposal):
        self.require("complete_analysis")
        self.suggestion = suggestion
        self.proposal = proposal
        self._move("complete_analysis", WorkflowStep.REVIEW)

    def fail_analysis(self, message: str):
        """분석 실패 시 업로드 단계로 돌아가며 에러 메시지를 남깁니다."""
        self.require("fail_analysis")
        self.error_message = message
        self._move("fail_analysis", WorkflowStep.UPLOAD)

    def accept_proposal(self, proposal: Proposal):
        """편집(필드/프롬프트) 결과를 수락합니다. 단계는 Review에 머뭅니다."""
        self.require("accept_proposal")
        self.proposal = proposal
        self.updated_at = datetime.now()

    def open_sow_editor(self, sow: str):
        self.require("open_sow_editor")
        self.sow = sow
        self._move("open_sow_editor", WorkflowStep.SOW_EDITOR)

    def update_sow(self, sow: str):
        self.require("update_sow")
        self.sow = sow
        self.updated_at = datetime.now()

    def return_to_review(self):
        self.require("return_to_review")
        self._move("return_to_review", WorkflowStep.REVIEW)

    def close(self):
        self.require("close")
        self._move("close", WorkflowStep.CLOSED)
