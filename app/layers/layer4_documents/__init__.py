"""Layer 4: Documents - SOW, briefs, timeline and kickoff outline generation."""

from .document_generator import (
    DocumentGenerator,
    DocumentRequest,
    build_proposal_summary,
    format_deadline,
)

__all__ = [
    "DocumentGenerator",
    "DocumentRequest",
    "build_proposal_summary",
    "format_deadline",
]
