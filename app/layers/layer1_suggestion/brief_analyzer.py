"""
Layer 1: Brief Analyzer - 고객 브리프를 분석해 패키지/커스텀 견적 추천을 받습니다.

입력: ProposalContext(고객사, 예산, 프로젝트 유형) + 추출된 문서 텍스트 + 카탈로그
출력: Suggestion (SuggestionParser 결과, 파싱 실패 시 대체 객체)
"""

import json
import logging

from pydantic import BaseModel, Field

from app.config import get_settings
from app.models import Package, ProposalContext, Service, Suggestion
from ..base_generator import BaseGenerator
from .prompts.analysis_prompts import ANALYSIS_ROLE_PROMPT, ANALYSIS_TASK_PROMPT
from .suggestion_parser import SuggestionParser

logger = logging.getLogger(__name__)


class BriefMaterials(BaseModel):
    """분석 프롬프트에 들어가는 자료."""

    documents: list[str] = Field(default_factory=list, description="'--- 파일명 ---' 형식 문서 텍스트")
    packages: list[Package] = Field(default_factory=list)
    services_by_category: dict[str, list[Service]] = Field(default_factory=dict)


class BriefAnalyzer(BaseGenerator[ProposalContext, Suggestion, BriefMaterials]):
    """
    브리프 분석기.

    LLM 호출 실패는 그대로 전달되고, 응답 파싱 실패는 SuggestionParser의 대체 객체로 복구됩니다.
    """

    _id_prefix = "SUG"
    _generator_name = "BriefAnalyzer"

    def __init__(self, claude_client=None, parser: SuggestionParser = None):
        super().__init__(claude_client)
        self.parser = parser or SuggestionParser()

    async def _do_generate(
        self,
        input_doc: ProposalContext,
        context: BriefMaterials,
    ) -> Suggestion:
        settings = get_settings()
        system_prompt = ANALYSIS_ROLE_PROMPT.format(agency_name=settings.agency_name)
        user_prompt = self._build_user_prompt(input_doc, context)

        raw_text = await self._call_claude_text(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            max_tokens=settings.llm_max_tokens,
            temperature=0.3,
            section_name="analyze",
        )
        return self.parser.parse(raw_text)

    def _build_user_prompt(self, context: ProposalContext, materials: BriefMaterials) -> str:
        packages_context = [package.summary() for package in materials.packages]

        service_lines = []
        for category, services in materials.services_by_category.items():
            service_lines.append(f"\n{category.upper()}:")
            for service in services:
                service_lines.append(
                    f"  - {service.service_name}: ${service.default_rate:g}/{service.billing_unit}"
                )

        documents = "\n\n".join(materials.documents) if materials.documents else "None provided"

        return f"""CLIENT INFORMATION:
- Client: {context.client_name}
- Budget: ${context.budget:,.0f}
- Project Type: {context.project_type or 'Not specified'}
- Additional Context: {context.additional_context or 'None'}

UPLOADED DOCUMENTS:
{documents}

AVAILABLE PACKAGES:
{json.dumps(packages_context, indent=2)}

AVAILABLE SERVICES BY CATEGORY (for custom builds):
{chr(10).join(service_lines)}

{ANALYSIS_TASK_PROMPT}"""
