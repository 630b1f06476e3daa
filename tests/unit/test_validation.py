"""입력 유효성 검증 유틸리티 테스트."""

import pytest

from app.exceptions import InputValidationError
from app.utils.validation import (
    validate_analysis_inputs,
    validate_document_count,
    validate_file_extension,
    validate_file_signature,
    validate_file_size,
    validate_filename,
)


class TestFilename:
    def test_valid(self):
        assert validate_filename("brief.pdf") == "brief.pdf"

    def test_null_bytes_removed(self):
        assert validate_filename("bri\x00ef.txt") == "brief.txt"

    @pytest.mark.parametrize("name", ["../etc/passwd", "dir/brief.txt", "", "   ", "a<b>.txt", ".pdf"])
    def test_rejected(self, name):
        with pytest.raises(InputValidationError):
            validate_filename(name)

    def test_too_long(self):
        with pytest.raises(InputValidationError):
            validate_filename("a" * 300 + ".txt")


class TestFileChecks:
    @pytest.mark.parametrize("name, ext", [("a.PDF", ".pdf"), ("b.docx", ".docx"), ("c.md", ".md")])
    def test_extension(self, name, ext):
        assert validate_file_extension(name) == ext

    @pytest.mark.parametrize("name", ["notes", "sheet.xlsx", "image.png"])
    def test_extension_rejected(self, name):
        with pytest.raises(InputValidationError):
            validate_file_extension(name)

    def test_size_limit(self):
        validate_file_size(1024)
        with pytest.raises(InputValidationError):
            validate_file_size(100 * 1024 * 1024)

    def test_total_size_limit(self):
        with pytest.raises(InputValidationError):
            validate_file_size(1024, total_size=500 * 1024 * 1024)

    def test_signature(self):
        validate_file_signature(b"%PDF-1.7 ...", ".pdf")
        validate_file_signature(b"anything", ".txt")

        with pytest.raises(InputValidationError):
            validate_file_signature(b"PK\x03\x04", ".pdf")
        with pytest.raises(InputValidationError):
            validate_file_signature(b"", ".docx")

    def test_document_count(self):
        validate_document_count(0, required=False)
        validate_document_count(3)

        with pytest.raises(InputValidationError):
            validate_document_count(0)
        with pytest.raises(InputValidationError):
            validate_document_count(11)


class TestAnalysisInputs:
    def test_valid(self):
        assert validate_analysis_inputs("  Acme  ", "8,000") == ("Acme", 8000.0)

    def test_both_missing(self):
        with pytest.raises(InputValidationError) as exc_info:
            validate_analysis_inputs("", None)

        assert exc_info.value.details["missing"] == ["clientName", "budget"]

    def test_non_numeric_budget(self):
        with pytest.raises(InputValidationError) as exc_info:
            validate_analysis_inputs("Acme", "lots")

        assert exc_info.value.details["missing"] == ["budget"]

    def test_zero_budget(self):
        with pytest.raises(InputValidationError):
            validate_analysis_inputs("Acme", 0)
