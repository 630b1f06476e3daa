"""
Suggestion Parser - LLM 브리프 분석 응답을 Suggestion 모델로 변환합니다.

후보 추출 순서:
1. ```json ... ``` 코드 블록
2. 첫 번째 균형 잡힌 {...} 구간
3. 원문 전체

어떤 후보도 파싱되지 않으면 예외 대신 원문을 reasoning에 담은 대체 Suggestion을 반환합니다.
"""

import json
import logging

from pydantic import ValidationError

from app.models import Suggestion
from app.utils.json_extraction import iter_json_candidates

logger = logging.getLogger(__name__)


class SuggestionParser:
    """LLM 응답 텍스트 → Suggestion. 절대 예외를 던지지 않습니다."""

    def parse(self, raw_text: str) -> Suggestion:
        text = raw_text or ""

        for candidate in iter_json_candidates(text):
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if not isinstance(data, dict):
                continue

            try:
                suggestion = Suggestion.model_validate(data)
            except ValidationError as e:
                logger.warning(f"[SuggestionParser] 스키마 검증 실패, 다음 후보 시도: {e.error_count()}건")
                continue

            logger.info(
                f"[SuggestionParser] 파싱 성공: usePackages={suggestion.use_packages}, "
                f"packages={len(suggestion.packages)}, "
                f"roles={len(suggestion.custom_build.roles) if suggestion.custom_build else 0}"
            )
            return suggestion

        logger.warning(
            f"[SuggestionParser] JSON 파싱 실패, 대체 추천 사용 (응답 길이 {len(text)} chars)"
        )
        return Suggestion.degraded_from(text)


def parse_suggestion(raw_text: str) -> Suggestion:
    """SuggestionParser().parse() 단축 함수."""
    return SuggestionParser().parse(raw_text)
