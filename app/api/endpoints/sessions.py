"""제안서 작성 세션 조회/종료 API입니다."""

from fastapi import APIRouter, Depends

from app.services.orchestrator import ProposalOrchestrator, get_orchestrator

router = APIRouter()


@router.get("/{session_id}")
async def get_session(
    session_id: str,
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """세션의 현재 단계와 마지막으로 수락된 제안서/SOW를 반환합니다."""
    session = await orchestrator.get_session(session_id)
    return session.to_wire()


@router.post("/{session_id}/close")
async def close_session(
    session_id: str,
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    session = await orchestrator.close_session(session_id)
    return {"success": True, "sessionId": session.session_id, "step": session.step.value}


@router.post("/{session_id}/review")
async def return_to_review(
    session_id: str,
    orchestrator: ProposalOrchestrator = Depends(get_orchestrator),
) -> dict:
    """SOW 편집 단계에서 제안서 검토 단계로 돌아갑니다."""
    session = await orchestrator.return_to_review(session_id)
    return {"success": True, "sessionId": session.session_id, "step": session.step.value}
