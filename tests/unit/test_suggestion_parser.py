"""SuggestionParser 단위 테스트.

다양한 AI 응답 형식을 처리하는지 확인합니다:
- 코드 블록으로 감싼 JSON, 설명 텍스트가 섞인 JSON
- 파싱 불가 응답 → 예외 없이 대체 Suggestion
"""

import json

import pytest

from app.layers.layer1_suggestion import SuggestionParser, parse_suggestion


@pytest.fixture
def parser():
    return SuggestionParser()


PACKAGE_RESPONSE = {
    "usePackages": True,
    "packages": [{"packageId": "branding-tier-i", "name": "Branding Tier I", "reason": "Fits budget"}],
    "reasoning": "The client needs a logo quickly.",
    "alternatives": "Tier II if they want collateral.",
    "suggestedTotal": 6050,
    "budgetAnalysis": "Within the $8,000 budget.",
}

CUSTOM_RESPONSE = {
    "usePackages": False,
    "customBuild": {
        "roles": [
            {"serviceName": "Website Design", "category": "Creative", "hours": "20", "rate": 150},
            {"serviceName": "Website Development", "category": "development", "hours": 40},
            {"category": "creative", "hours": 5},
        ],
        "estimatedTotal": 9000,
    },
    "reasoning": "No package fits a custom web build.",
    "suggestedTotal": "9,000",
}


class TestValidResponses:
    def test_bare_json(self, parser):
        suggestion = parser.parse(json.dumps(PACKAGE_RESPONSE))

        assert suggestion.use_packages is True
        assert suggestion.packages[0].package_id == "branding-tier-i"
        assert suggestion.packages[0].reason == "Fits budget"
        assert suggestion.suggested_total == 6050
        assert suggestion.budget_analysis == "Within the $8,000 budget."
        assert suggestion.degraded is False

    def test_fenced_json(self, parser):
        text = f"Here is my analysis:\n```json\n{json.dumps(PACKAGE_RESPONSE)}\n```\nLet me know!"

        suggestion = parser.parse(text)

        assert suggestion.use_packages is True
        assert suggestion.reasoning == "The client needs a logo quickly."

    def test_json_with_surrounding_prose(self, parser):
        text = f"Based on the brief {json.dumps(CUSTOM_RESPONSE)} that is my recommendation."

        suggestion = parser.parse(text)

        assert suggestion.use_packages is False
        assert suggestion.suggested_total == 9000

    def test_custom_build_roles_normalized(self, parser):
        suggestion = parser.parse(json.dumps(CUSTOM_RESPONSE))

        roles = suggestion.custom_build.roles
        assert [r.service_name for r in roles] == ["Website Design", "Website Development"]
        assert roles[0].category == "creative"
        assert roles[0].hours == 20
        assert roles[1].rate is None

    def test_unusable_role_numbers_cleared(self, parser):
        text = (
            '{"usePackages": false, "customBuild": {"roles": ['
            '{"serviceName": "A", "hours": NaN, "rate": -150},'
            '{"serviceName": "B", "hours": Infinity, "cost": -100},'
            '{"serviceName": "C", "hours": "-3", "rate": "1e999"}]}}'
        )

        suggestion = parser.parse(text)

        assert suggestion.degraded is False
        roles = suggestion.custom_build.roles
        assert [r.hours for r in roles] == [0, 0, 0]
        assert [r.rate for r in roles] == [None, None, None]
        assert roles[1].cost is None

    def test_package_ref_alias(self, parser):
        suggestion = parser.parse('{"usePackages": "true", "packages": [{"packageRef": "seo-foundations-monthly"}]}')

        assert suggestion.use_packages is True
        assert suggestion.packages[0].package_id == "seo-foundations-monthly"

    def test_missing_fields_defaulted(self, parser):
        suggestion = parser.parse('{"usePackages": false}')

        assert suggestion.packages == []
        assert suggestion.custom_build is None
        assert suggestion.reasoning == ""
        assert suggestion.suggested_total == 0

    def test_braces_inside_strings(self, parser):
        data = {"usePackages": False, "reasoning": "Use {brand} tokens and } braces"}

        suggestion = parser.parse("prefix " + json.dumps(data) + " suffix")

        assert suggestion.reasoning == "Use {brand} tokens and } braces"


class TestDegradedFallback:
    @pytest.mark.parametrize("text", [
        "I think they should buy Branding Tier I.",
        "{not valid json at all",
        "",
        "[1, 2, 3]",
    ])
    def test_never_raises(self, parser, text):
        suggestion = parser.parse(text)

        assert suggestion.degraded is True
        assert suggestion.use_packages is False
        assert suggestion.packages == []
        assert suggestion.custom_build is None
        assert suggestion.suggested_total == 0
        assert suggestion.reasoning == text

    def test_none_input(self, parser):
        suggestion = parser.parse(None)

        assert suggestion.degraded is True
        assert suggestion.reasoning == ""


def test_parse_suggestion_shortcut():
    suggestion = parse_suggestion(json.dumps(PACKAGE_RESPONSE))
    assert suggestion.packages[0].name == "Branding Tier I"
