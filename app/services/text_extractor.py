"""
업로드 문서 텍스트 추출 서비스입니다.
외부 라이브러리(PyPDF2, python-docx)를 사용하여 고객 브리프에서 텍스트를 추출합니다.

텍스트를 얻지 못한 문서는 분석 프롬프트에서 제외됩니다.
"""

import io
import logging
import os
from typing import Iterable, Optional

from docx import Document
from PyPDF2 import PdfReader

from app.models import InputDocument, InputMetadata, InputType, EXTENSION_TYPES

logger = logging.getLogger(__name__)


class TextExtractor:
    """파일 확장자에 따라 적절한 추출 함수를 호출합니다."""

    def extract(
        self,
        content: bytes,
        filename: str,
        document_id: str,
        content_type: Optional[str] = None,
        source_path: Optional[str] = None,
    ) -> InputDocument:
        ext = os.path.splitext(filename)[1].lower()
        input_type = EXTENSION_TYPES.get(ext, InputType.TEXT)
        metadata = InputMetadata(
            filename=filename,
            content_type=content_type,
            size_bytes=len(content),
        )

        try:
            if input_type == InputType.PDF:
                text, metadata.page_count = self._extract_pdf(content)
            elif input_type == InputType.DOCX:
                text, metadata.paragraph_count = self._extract_docx(content)
            elif input_type == InputType.DOC:
                # 구형 바이너리 Word 포맷은 텍스트 추출을 지원하지 않음
                logger.warning(f"[Extractor] .doc 파일은 텍스트 추출 불가: {filename}")
                text = ""
            else:
                text = content.decode("utf-8", errors="replace")
        except Exception as e:
            logger.warning(f"[Extractor] 텍스트 추출 실패 {filename}: {e}")
            text = ""

        document = InputDocument(
            id=document_id,
            input_type=input_type,
            filename=filename,
            extracted_text=text.strip(),
            metadata=metadata,
            source_path=source_path,
        )
        logger.info(
            f"[Extractor] {filename}: {len(document.extracted_text)} chars ({input_type.value})"
        )
        return document

    def _extract_pdf(self, content: bytes) -> tuple[str, int]:
        """PyPDF2를 사용하여 PDF 내용을 텍스트로 추출합니다."""
        reader = PdfReader(io.BytesIO(content))
        pages = [page.extract_text() or "" for page in reader.pages]
        return "\n\n".join(pages), len(pages)

    def _extract_docx(self, content: bytes) -> tuple[str, int]:
        """python-docx를 사용하여 Word 문서의 문단과 표를 추출합니다."""
        doc = Document(io.BytesIO(content))

        paragraphs = [para.text for para in doc.paragraphs if para.text.strip()]

        tables_text = []
        for table in doc.tables:
            rows = [" | ".join(cell.text.strip() for cell in row.cells) for row in table.rows]
            tables_text.append("\n".join(rows))

        all_text = "\n\n".join(paragraphs)
        if tables_text:
            all_text += "\n\n" + "\n\n".join(tables_text)
        return all_text, len(paragraphs)


def frame_documents(documents: Iterable[InputDocument]) -> list[str]:
    """텍스트가 있는 문서만 '--- 파일명 ---' 형식으로 묶어 반환합니다."""
    return [doc.framed_text() for doc in documents if doc.has_text]


_text_extractor: Optional[TextExtractor] = None


def get_text_extractor() -> TextExtractor:
    global _text_extractor
    if _text_extractor is None:
        _text_extractor = TextExtractor()
    return _text_extractor
