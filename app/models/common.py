"""
공통 데이터 모델 모듈입니다.
카탈로그, 추천(Suggestion), 제안서 모델이 공통으로 사용하는 기반 클래스와 도우미를 정의합니다.

외부(프론트엔드, LLM)와 주고받는 JSON은 camelCase(serviceName, lineItems 등)를 사용하고,
파이썬 코드에서는 snake_case 필드명을 사용합니다.
"""

import math
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    camelCase 별칭을 자동으로 붙이는 기본 모델입니다.

    - 입력: camelCase, snake_case 둘 다 허용 (populate_by_name)
    - 출력: model_dump(by_alias=True) 시 camelCase
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """외부 전송용(camelCase) 딕셔너리로 변환."""
        return self.model_dump(mode="json", by_alias=True)


def round_currency(value: float, precision: int = 2) -> float:
    """금액을 통화 자릿수에 맞게 반올림합니다."""
    return round(float(value), precision)


def coerce_number(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """
    LLM이 보낸 숫자 값을 float로 정리합니다.

    "1,500", "$150", None, "" 같은 값을 처리합니다.
    변환할 수 없거나 NaN/inf 이면 default를 반환합니다.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else default
    if isinstance(value, str):
        cleaned = value.replace(",", "").replace("$", "").strip()
        if not cleaned:
            return default
        try:
            number = float(cleaned)
        except ValueError:
            return default
        return number if math.isfinite(number) else default
    return default
