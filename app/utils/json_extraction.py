"""LLM 응답 텍스트에서 JSON 객체를 꺼내는 유틸리티."""

import json
import re
from typing import Any, Iterator, Optional


_FENCED_JSON = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)


def _balanced_object(text: str) -> Optional[str]:
    """첫 '{'에서 시작해 괄호 깊이가 0이 되는 지점까지의 구간 (문자열 내부 괄호 무시)."""
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]
    return None


def iter_json_candidates(text: str) -> Iterator[str]:
    """
    파싱을 시도할 후보 문자열을 우선순위대로 생성합니다.

    1. ```json ... ``` 코드 블록
    2. 첫 번째 균형 잡힌 {...} 구간
    3. 첫 '{' ~ 마지막 '}' 구간
    4. 원문 전체
    """
    seen = set()

    def _emit(candidate: Optional[str]):
        if candidate is None:
            return None
        candidate = candidate.strip()
        if candidate and candidate not in seen:
            seen.add(candidate)
            return candidate
        return None

    for match in _FENCED_JSON.finditer(text):
        candidate = _emit(match.group(1))
        if candidate:
            yield candidate

    candidate = _emit(_balanced_object(text))
    if candidate:
        yield candidate

    first, last = text.find("{"), text.rfind("}")
    if first != -1 and last > first:
        candidate = _emit(text[first:last + 1])
        if candidate:
            yield candidate

    candidate = _emit(text)
    if candidate:
        yield candidate


def extract_json_object(text: Optional[str]) -> Optional[dict[str, Any]]:
    """
    텍스트에서 첫 번째로 파싱되는 JSON 객체(dict)를 반환합니다.
    객체로 파싱되는 후보가 없으면 None.
    """
    if not text:
        return None

    for candidate in iter_json_candidates(text):
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value
    return None
