"""입력 유효성 검증 유틸리티.

파일 업로드 시 보안 및 무결성 검증과, 분석 요청 입력(고객사명/예산) 검증을 수행합니다.
"""

import os
import re
from typing import Any, Optional

from app.config import get_settings
from app.exceptions import InputValidationError
from app.models.common import coerce_number


# 허용된 파일 확장자 목록 (고객 브리프)
ALLOWED_EXTENSIONS = {".txt", ".md", ".pdf", ".doc", ".docx"}

# 매직 넘버 기반 파일 시그니처 (확장자 → 시그니처 바이트)
FILE_SIGNATURES = {
    ".pdf": b"%PDF",
    ".docx": b"PK",          # ZIP-based (Office Open XML)
    ".doc": b"\xd0\xcf\x11", # OLE2 compound document
}

# 위험한 파일명 패턴
DANGEROUS_PATTERNS = re.compile(r"[<>:\"|?*\x00-\x1f]")


def validate_filename(filename: str) -> str:
    """
    파일명 유효성 검증.

    - 경로 순회 공격 방지 (../, / 등)
    - 널 바이트 제거
    - 위험 문자 검사
    - 길이 제한

    Args:
        filename: 원본 파일명

    Returns:
        정리된 안전한 파일명

    Raises:
        InputValidationError: 유효하지 않은 파일명
    """
    settings = get_settings()

    if not filename or not filename.strip():
        raise InputValidationError("Filename is empty")

    cleaned = filename.replace("\x00", "")

    basename = os.path.basename(cleaned)
    if basename != cleaned or ".." in cleaned:
        raise InputValidationError(
            "Invalid filename: path traversal detected",
            details={"filename": filename},
        )

    if DANGEROUS_PATTERNS.search(basename):
        raise InputValidationError(
            "Filename contains characters that are not allowed",
            details={"filename": filename},
        )

    if len(basename) > settings.max_filename_length:
        raise InputValidationError(
            f"Filename is too long (max {settings.max_filename_length} characters)",
            details={"filename": basename, "length": len(basename)},
        )

    # 확장자만 있는 경우
    name_without_ext = os.path.splitext(basename)[0]
    if not name_without_ext or name_without_ext.startswith("."):
        raise InputValidationError(
            "Filename is empty (extension only)",
            details={"filename": basename},
        )

    return basename


def validate_file_size(
    file_size: int,
    total_size: Optional[int] = None,
) -> None:
    """
    파일 크기 검증.

    Args:
        file_size: 개별 파일 크기 (bytes)
        total_size: 전체 업로드 누적 크기 (bytes, 선택)

    Raises:
        InputValidationError: 크기 제한 초과
    """
    settings = get_settings()
    max_bytes = settings.max_file_size_mb * 1024 * 1024

    if file_size > max_bytes:
        raise InputValidationError(
            f"File exceeds the size limit (max {settings.max_file_size_mb}MB)",
            details={
                "file_size_bytes": file_size,
                "max_size_bytes": max_bytes,
            },
        )

    if total_size is not None:
        max_total = settings.max_total_upload_mb * 1024 * 1024
        if total_size > max_total:
            raise InputValidationError(
                f"Total upload exceeds the size limit (max {settings.max_total_upload_mb}MB)",
                details={
                    "total_size_bytes": total_size,
                    "max_total_bytes": max_total,
                },
            )


def validate_file_extension(filename: str) -> str:
    """
    파일 확장자 검증.

    Returns:
        소문자로 변환된 확장자 (예: ".pdf")
    """
    ext = os.path.splitext(filename)[1].lower()

    if not ext:
        raise InputValidationError(
            "File has no extension",
            details={"filename": filename},
        )

    if ext not in ALLOWED_EXTENSIONS:
        raise InputValidationError(
            f"Unsupported file type: {ext}",
            details={
                "extension": ext,
                "allowed": sorted(ALLOWED_EXTENSIONS),
            },
        )

    return ext


def validate_file_signature(content: bytes, extension: str) -> None:
    """
    매직 넘버 기반 파일 내용 검증.

    시그니처가 정의되지 않은 확장자(.txt, .md)는 검증을 건너뜁니다.
    """
    expected = FILE_SIGNATURES.get(extension)
    if expected is None:
        return

    if not content or len(content) < len(expected):
        raise InputValidationError(
            "File is empty or corrupted",
            details={"extension": extension},
        )

    if not content[:len(expected)].startswith(expected):
        raise InputValidationError(
            f"File content does not match its extension ({extension})",
            details={"extension": extension},
        )


def validate_document_count(count: int, required: bool = True) -> None:
    """
    업로드 문서 수 제한 검증.

    Args:
        count: 업로드하려는 문서 수
        required: True이면 최소 1개 이상 필요

    Raises:
        InputValidationError: 문서 수 부족 또는 초과
    """
    settings = get_settings()

    if required and count < 1:
        raise InputValidationError("At least one document must be uploaded")

    if count > settings.max_document_count:
        raise InputValidationError(
            f"Too many documents (max {settings.max_document_count})",
            details={
                "count": count,
                "max_count": settings.max_document_count,
            },
        )


def validate_analysis_inputs(client_name: Optional[str], budget: Any) -> tuple[str, float]:
    """
    분석 요청의 필수 입력(고객사명, 예산) 검증.
    외부 호출 전에 실행되어야 합니다.

    Returns:
        (정리된 고객사명, 예산 float)
    """
    missing = []
    name = (client_name or "").strip()
    if not name:
        missing.append("clientName")

    amount = coerce_number(budget, default=None)
    if amount is None:
        missing.append("budget")

    if missing:
        raise InputValidationError(
            "Client name and budget are required",
            details={"missing": missing},
        )

    if amount <= 0:
        raise InputValidationError(
            "Budget must be greater than zero",
            details={"budget": budget},
        )

    return name, amount
