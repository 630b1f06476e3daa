"""
제안서 생성 시스템 커스텀 예외 계층입니다.
각 레이어/서비스별 구조화된 에러 코드와 메시지를 제공합니다.
"""

from typing import Optional, Any


class ProposalBuilderError(Exception):
    """제안서 생성 시스템 기본 예외 클래스."""

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class ParsingError(ProposalBuilderError):
    """AI 응답(수정된 제안서 JSON) 파싱 실패."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_PARSE_001", details=details)


class ReconciliationError(ProposalBuilderError):
    """Layer 2: 카탈로그와 추천 결과 병합 단계 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_RECON_001", details=details)


class GenerationError(ProposalBuilderError):
    """Layer 4: 문서 생성 단계 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_GEN_001", details=details)


class CatalogError(ProposalBuilderError):
    """서비스/패키지 카탈로그 로딩 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_CATALOG_001", details=details)


class StorageError(ProposalBuilderError):
    """파일 저장소 관련 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_STORE_001", details=details)


class ClaudeClientError(ProposalBuilderError):
    """Claude AI 클라이언트 통신 에러."""

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        error_code: str = "ERR_CLAUDE_001",
    ):
        super().__init__(message, error_code=error_code, details=details)


class InsufficientCreditsError(ClaudeClientError):
    """API 계정 크레딧 부족 (결제 페이지 안내가 필요한 경우)."""

    def __init__(self, message: str, billing_url: str, details: Optional[Any] = None):
        merged = {"billing_url": billing_url}
        if isinstance(details, dict):
            merged.update(details)
        super().__init__(message, details=merged, error_code="ERR_CLAUDE_CREDIT")
        self.billing_url = billing_url


class InputValidationError(ProposalBuilderError):
    """입력 유효성 검증 에러 (400 응답)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_INPUT_001", details=details)


class WorkflowError(ProposalBuilderError):
    """세션 상태에서 허용되지 않는 전이 (409 응답)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_FLOW_001", details=details)


class NotFoundError(ProposalBuilderError):
    """요청한 세션/제안서/문서를 찾을 수 없음 (404 응답)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_NOT_FOUND", details=details)
