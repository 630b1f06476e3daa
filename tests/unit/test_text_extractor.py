"""TextExtractor 단위 테스트."""

import io

import pytest
from docx import Document
from PyPDF2 import PdfWriter

from app.models import InputType
from app.services.text_extractor import TextExtractor, frame_documents


@pytest.fixture
def extractor():
    return TextExtractor()


def _docx_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("Acme Coffee brand refresh")
    doc.add_paragraph("")
    doc.add_paragraph("Deadline: Q3")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Budget"
    table.rows[0].cells[1].text = "$8,000"
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestExtract:
    def test_text_file(self, extractor):
        doc = extractor.extract(b"  Need a logo.\n", "brief.txt", "doc-1", content_type="text/plain")

        assert doc.input_type == InputType.TEXT
        assert doc.extracted_text == "Need a logo."
        assert doc.metadata.size_bytes == 15
        assert doc.metadata.content_type == "text/plain"

    def test_markdown_file(self, extractor):
        doc = extractor.extract("# 브리프".encode("utf-8"), "notes.md", "doc-2")

        assert doc.input_type == InputType.MARKDOWN
        assert doc.extracted_text == "# 브리프"

    def test_docx_paragraphs_and_tables(self, extractor):
        doc = extractor.extract(_docx_bytes(), "brief.docx", "doc-3")

        assert doc.input_type == InputType.DOCX
        assert "Acme Coffee brand refresh" in doc.extracted_text
        assert "Budget | $8,000" in doc.extracted_text
        assert doc.metadata.paragraph_count == 2

    def test_pdf_without_text(self, extractor):
        doc = extractor.extract(_blank_pdf_bytes(), "scan.pdf", "doc-4")

        assert doc.input_type == InputType.PDF
        assert doc.metadata.page_count == 1
        assert doc.has_text is False

    def test_legacy_doc_has_no_text(self, extractor):
        doc = extractor.extract(b"\xd0\xcf\x11\xe0 binary", "old.doc", "doc-5")

        assert doc.input_type == InputType.DOC
        assert doc.extracted_text == ""

    def test_broken_file_does_not_raise(self, extractor):
        doc = extractor.extract(b"%PDF-garbage", "broken.pdf", "doc-6")

        assert doc.extracted_text == ""
        assert doc.has_text is False


def test_frame_documents_skips_empty(extractor):
    docs = [
        extractor.extract(b"Logo please", "a.txt", "doc-a"),
        extractor.extract(b"   ", "b.txt", "doc-b"),
    ]

    assert frame_documents(docs) == ["--- a.txt ---\nLogo please"]
