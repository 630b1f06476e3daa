"""Anthropic Messages API client service for proposal generation.

이 모듈은 anthropic SDK(AsyncAnthropic)를 래핑하여 비동기 AI 호출을 제공합니다.

주요 기능:
- complete(): 텍스트 응답 요청 (JSON 추출은 호출하는 쪽 파서가 담당)

에러 처리:
- 크레딧 부족 응답은 InsufficientCreditsError 로 구분하여 결제 페이지 URL을 함께 전달
- 그 밖의 통신/상태 오류는 ClaudeClientError 로 변환

재시도 전략:
- 기본은 재시도 없음 (llm_max_attempts=1)
- llm_max_attempts > 1 이면 지수 백오프 (llm_retry_delay * 2^attempt)
- 크레딧 부족은 재시도하지 않음
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

import anthropic

from app.config import get_settings
from app.exceptions import ClaudeClientError, InsufficientCreditsError

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

CREDIT_ERROR_MARKER = "credit balance is too low"


def is_credit_error(message: str) -> bool:
    """API 에러 메시지가 크레딧 부족을 뜻하는지 확인."""
    return CREDIT_ERROR_MARKER in (message or "").lower()


class ClaudeClient:
    """
    Anthropic Messages API 래퍼 클래스.

    Attributes:
        _model: 사용할 모델명
        _max_attempts: 최대 시도 횟수 (1이면 재시도 없음)
        _retry_delay: 초기 재시도 대기 시간(초)
    """

    def __init__(self, api_client: Optional[anthropic.AsyncAnthropic] = None):
        settings = get_settings()
        self._model = settings.claude_model
        self._default_max_tokens = settings.llm_max_tokens
        self._timeout = settings.llm_timeout_seconds
        self._max_attempts = max(1, settings.llm_max_attempts)
        self._retry_delay = settings.llm_retry_delay
        self._billing_url = settings.billing_url
        self._api_key = settings.anthropic_api_key
        self._api_client = api_client

        logger.info(
            f"[ClaudeClient] 초기화 완료 (model={self._model}, attempts={self._max_attempts})"
        )

    def _get_api_client(self) -> anthropic.AsyncAnthropic:
        if self._api_client is None:
            if not self._api_key:
                raise ClaudeClientError(
                    "ANTHROPIC_API_KEY is not configured",
                    details={"setting": "anthropic_api_key"},
                )
            # SDK 자체 재시도는 끄고, 재시도 정책은 이 클래스에서만 관리
            self._api_client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._api_client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
        temperature: float = 0.3,
    ) -> str:
        """
        Send a completion request to Claude.

        Args:
            system_prompt: System-level instructions (빈 문자열이면 생략)
            user_prompt: User message content
            max_tokens: Maximum tokens in response (None이면 설정값)
            temperature: Sampling temperature

        Returns:
            Claude's response text
        """
        return await self._execute(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            max_tokens=max_tokens or self._default_max_tokens,
            temperature=temperature,
        )

    async def _request(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """단일 API 호출. SDK 예외를 도메인 예외로 변환합니다."""
        client = self._get_api_client()
        kwargs = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = await client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            message = getattr(e, "message", None) or str(e)
            if is_credit_error(message):
                raise InsufficientCreditsError(
                    "API credits needed: your Anthropic credit balance is too low. "
                    "Please add credits to continue.",
                    billing_url=self._billing_url,
                    details={"status_code": e.status_code},
                ) from e
            raise ClaudeClientError(
                f"Claude API error ({e.status_code}): {message}",
                details={"status_code": e.status_code},
            ) from e
        except anthropic.APITimeoutError as e:
            raise ClaudeClientError(
                f"Claude API request timed out after {self._timeout}s"
            ) from e
        except anthropic.APIConnectionError as e:
            raise ClaudeClientError(f"Could not reach Claude API: {e}") from e

        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
        return text.strip()

    async def _execute(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        API 호출 실행 (설정된 횟수만큼 시도).

        Returns:
            Claude의 응답 텍스트

        Raises:
            InsufficientCreditsError: 크레딧 부족 (즉시 전달)
            ClaudeClientError: 마지막 시도에서 발생한 에러
        """
        last_error: Optional[ClaudeClientError] = None
        logger.info(f"[ClaudeClient] 프롬프트 길이: {len(system_prompt) + len(user_prompt)} chars")

        for attempt in range(self._max_attempts):
            start_time = datetime.now()
            try:
                result = await self._request(system_prompt, user_prompt, max_tokens, temperature)
                elapsed = (datetime.now() - start_time).total_seconds()
                logger.info(
                    f"[ClaudeClient] 완료: {elapsed:.1f}초, 응답 길이: {len(result)} chars"
                )
                return result

            except InsufficientCreditsError:
                logger.error("[ClaudeClient] 크레딧 부족으로 호출 실패")
                raise

            except ClaudeClientError as e:
                last_error = e
                logger.error(
                    f"[ClaudeClient] 시도 {attempt + 1}/{self._max_attempts} 실패: {e.message}"
                )
                if attempt < self._max_attempts - 1:
                    wait_time = self._retry_delay * (2 ** attempt)
                    logger.info(f"[ClaudeClient] {wait_time}초 후 재시도...")
                    await asyncio.sleep(wait_time)

        raise last_error


# Singleton instance for dependency injection
_claude_client: Optional[ClaudeClient] = None


def get_claude_client() -> ClaudeClient:
    """Get or create Claude client singleton."""
    global _claude_client
    if _claude_client is None:
        _claude_client = ClaudeClient()
    return _claude_client
