"""
입력 문서 관련 데이터 모델입니다.
사용자가 업로드하는 고객 브리프(PDF, Word, 텍스트)의 형식을 정의합니다.
"""

from enum import Enum
from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CamelModel


class InputType(str, Enum):
    """지원하는 입력 파일의 종류입니다."""

    TEXT = "text"          # .txt
    MARKDOWN = "markdown"  # .md
    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"            # 구형 Word (텍스트 추출 불가, 보관만)


EXTENSION_TYPES = {
    ".txt": InputType.TEXT,
    ".md": InputType.MARKDOWN,
    ".pdf": InputType.PDF,
    ".docx": InputType.DOCX,
    ".doc": InputType.DOC,
}


class InputMetadata(CamelModel):
    """
    입력 문서에서 추출한 부가 정보(메타데이터)입니다.
    """

    filename: Optional[str] = None
    content_type: Optional[str] = None
    size_bytes: int = 0
    page_count: Optional[int] = None  # PDF 페이지 수
    paragraph_count: Optional[int] = None  # Word 문단 수


class InputDocument(CamelModel):
    """
    제안서 분석을 위해 업로드된 하나의 문서 단위를 나타냅니다.
    """

    id: str = Field(..., description="문서 고유 ID")
    input_type: InputType
    filename: str
    extracted_text: str = Field("", description="추출된 텍스트 (없으면 분석에서 제외)")
    metadata: InputMetadata = Field(default_factory=InputMetadata)
    source_path: Optional[str] = None  # 원본 파일 저장 경로
    uploaded_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_text(self) -> bool:
        return bool(self.extracted_text.strip())

    def framed_text(self) -> str:
        """프롬프트에 넣을 때 사용하는 '--- 파일명 ---' 형식."""
        return f"--- {self.filename} ---\n{self.extracted_text}"
