"""Base generator class for all LLM-backed generators.

이 모듈은 브리프 분석, 프롬프트 편집, 문서(SOW/Brief) 생성기들이 공통으로 사용하는
기본 기능을 제공하는 추상 베이스 클래스를 정의합니다.

주요 기능:
- 표준 ID 생성
- 템플릿 메서드 패턴을 통한 일관된 생성 흐름
- Claude API 텍스트 호출 공통화
- 로깅 및 에러 처리 표준화
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import TypeVar, Generic, Optional

from app.exceptions import ClaudeClientError
from app.services.claude_client import ClaudeClient, get_claude_client

# 제네릭 타입 변수
InputT = TypeVar('InputT')      # 입력 타입 (Proposal, ProposalContext 등)
OutputT = TypeVar('OutputT')    # 출력 타입 (Proposal, GeneratedDocument 등)
ContextT = TypeVar('ContextT')  # 컨텍스트 타입 (편집 지시문, 문서 요청 등)

logger = logging.getLogger(__name__)


class BaseGenerator(ABC, Generic[InputT, OutputT, ContextT]):
    """
    LLM 생성기 추상 베이스 클래스.

    Template Method 패턴을 사용하여 일관된 생성 흐름을 보장합니다:
    1. 시작 로깅
    2. _do_generate() 호출 (서브클래스 구현)
    3. 완료/실패 로깅 (소요 시간 포함)

    LLM 호출 실패(ClaudeClientError)는 삼키지 않고 호출자에게 그대로 전달합니다.

    Attributes:
        claude_client: Claude API 호출을 위한 클라이언트
        _id_prefix: 생성되는 ID의 접두어 (예: "PROP", "DOC")
        _generator_name: 로깅에 사용되는 생성기 이름
    """

    # 서브클래스에서 오버라이드해야 하는 클래스 속성
    _id_prefix: str = "DOC"
    _generator_name: str = "BaseGenerator"

    def __init__(self, claude_client: Optional[ClaudeClient] = None):
        """
        Args:
            claude_client: Claude 클라이언트 인스턴스.
                          None이면 싱글톤 인스턴스 사용.
        """
        self.claude_client = claude_client or get_claude_client()

    def _generate_id(self) -> str:
        """
        표준 형식의 ID 생성.

        형식: {PREFIX}-{YYYYMMDD}-{6자리 UUID}
        예시: PROP-20240115-a1b2c3, DOC-20240115-d4e5f6
        """
        date_part = datetime.now().strftime('%Y%m%d')
        uuid_part = uuid.uuid4().hex[:6]
        return f"{self._id_prefix}-{date_part}-{uuid_part}"

    def _describe(self, input_doc: InputT) -> str:
        """시작 로그에 표시할 입력 설명."""
        for attr in ("title", "client_name", "id"):
            value = getattr(input_doc, attr, None)
            if value:
                return str(value)
        return "Unknown"

    async def generate(
        self,
        input_doc: InputT,
        context: ContextT,
    ) -> OutputT:
        """
        생성 템플릿 메서드.

        서브클래스는 이 메서드를 직접 오버라이드하기보다
        _do_generate()를 구현해야 합니다.

        Raises:
            Exception: 생성 중 발생한 모든 예외
        """
        logger.info(f"[{self._generator_name}] 생성 시작: {self._describe(input_doc)}")
        start_time = datetime.now()

        try:
            result = await self._do_generate(input_doc, context)

            elapsed = (datetime.now() - start_time).total_seconds()
            logger.info(f"[{self._generator_name}] 생성 완료: {elapsed:.1f}초")

            return result

        except Exception as e:
            elapsed = (datetime.now() - start_time).total_seconds()
            logger.error(f"[{self._generator_name}] 생성 실패 ({elapsed:.1f}초): {e}")
            raise

    @abstractmethod
    async def _do_generate(
        self,
        input_doc: InputT,
        context: ContextT,
    ) -> OutputT:
        """실제 생성 로직 (서브클래스에서 구현)."""
        pass

    def _log_prefix(self, section_name: str) -> str:
        if section_name:
            return f"[{self._generator_name}:{section_name}]"
        return f"[{self._generator_name}]"

    async def _call_claude_text(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
        temperature: float = 0.4,
        section_name: str = "",
    ) -> str:
        """
        Claude API 텍스트 호출 공통 메서드.

        Returns:
            응답 텍스트 (앞뒤 공백 제거)

        Raises:
            ClaudeClientError: API 호출 실패
        """
        log_prefix = self._log_prefix(section_name)
        start = datetime.now()
        try:
            result = await self.claude_client.complete(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except ClaudeClientError as e:
            logger.error(f"{log_prefix} Claude 텍스트 호출 실패: {e.message}")
            raise
        elapsed = (datetime.now() - start).total_seconds()
        logger.debug(f"{log_prefix} Claude 텍스트 호출 완료: {elapsed:.1f}초")
        return (result or "").strip()
