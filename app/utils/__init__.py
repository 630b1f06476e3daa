"""유틸리티 모듈."""

from .validation import (
    validate_filename,
    validate_file_size,
    validate_file_extension,
    validate_file_signature,
    validate_document_count,
    validate_analysis_inputs,
)
from .json_extraction import extract_json_object, iter_json_candidates

__all__ = [
    "validate_filename",
    "validate_file_size",
    "validate_file_extension",
    "validate_file_signature",
    "validate_document_count",
    "validate_analysis_inputs",
    "extract_json_object",
    "iter_json_candidates",
]
