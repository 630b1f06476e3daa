"""
생성 문서(SOW, Brief, Timeline 등) 모델입니다.
"""

import html
from enum import Enum
from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CamelModel


class DocumentType(str, Enum):
    """생성 가능한 문서 종류입니다."""

    # 제안서 기반
    SOW = "sow"
    BRIEF = "brief"
    # 업로드 문서 기반
    STATEMENT_OF_WORK = "statementOfWork"
    INTERNAL_BRIEF = "internalBrief"
    TIMELINE = "timeline"
    KICKOFF_PRESENTATION = "kickoffPresentation"

    @property
    def from_proposal(self) -> bool:
        return self in (DocumentType.SOW, DocumentType.BRIEF)


DOCUMENT_TITLES = {
    DocumentType.SOW: "Statement of Work",
    DocumentType.BRIEF: "Client Brief",
    DocumentType.STATEMENT_OF_WORK: "Statement of Work",
    DocumentType.INTERNAL_BRIEF: "Internal Brief",
    DocumentType.TIMELINE: "Project Timeline",
    DocumentType.KICKOFF_PRESENTATION: "Kickoff Presentation",
}


class GeneratedDocument(CamelModel):
    """AI가 생성한 문서 한 건."""

    id: str = Field(..., description="문서 ID (DOC-YYYYMMDD-xxxxxx)")
    document_type: DocumentType
    title: str
    content: str
    client_name: Optional[str] = None
    proposal_id: Optional[str] = None
    session_id: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)

    def to_markdown(self) -> str:
        return self.content

    def to_html(self) -> str:
        return markdown_to_word_html(self.content, self.title)


def markdown_to_word_html(content: str, title: str) -> str:
    """
    마크다운 텍스트를 Word에서 열 수 있는 HTML(.doc)로 변환합니다.

    줄 단위 변환만 지원합니다:
    '# ' → h1, '## ' → h2, '### ' → h3, '- ' → li, 빈 줄 → <br>, 나머지 → <p>
    """
    body = []
    for line in content.split("\n"):
        if line.startswith("### "):
            body.append(f"<h3>{html.escape(line[4:])}</h3>")
        elif line.startswith("## "):
            body.append(f"<h2>{html.escape(line[3:])}</h2>")
        elif line.startswith("# "):
            body.append(f"<h1>{html.escape(line[2:])}</h1>")
        elif line.startswith("- "):
            body.append(f"<li>{html.escape(line[2:])}</li>")
        elif not line.strip():
            body.append("<br>")
        else:
            body.append(f"<p>{html.escape(line)}</p>")

    return (
        "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
        "xmlns:w='urn:schemas-microsoft-com:office:word' "
        "xmlns='http://www.w3.org/TR/REC-html40'>\n"
        "<head><meta charset='utf-8'>"
        f"<title>{html.escape(title)}</title>"
        "<style>body { font-family: Calibri, Arial, sans-serif; font-size: 11pt; } "
        "h1 { font-size: 20pt; } h2 { font-size: 16pt; } h3 { font-size: 13pt; }</style>"
        "</head>\n<body>\n"
        + "\n".join(body)
        + "\n</body>\n</html>"
    )
