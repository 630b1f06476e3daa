"""DocumentGenerator 단위 테스트.

Claude 호출은 mock으로 대체하고 프롬프트 구성과 검증만 확인합니다.
"""

from datetime import date

import pytest

from app.exceptions import GenerationError, InputValidationError
from app.layers.layer4_documents import (
    DocumentGenerator,
    DocumentRequest,
    build_proposal_summary,
    format_deadline,
)
from app.models import DocumentType, Service


@pytest.fixture
def generator(mock_claude_client):
    services = [Service(service_name="Creative Design", category="creative", default_rate=150)]
    return DocumentGenerator(claude_client=mock_claude_client, services=services)


def _prompt(mock_claude_client) -> str:
    return mock_claude_client.complete.call_args.kwargs["user_prompt"]


class TestProposalDocuments:
    async def test_sow_from_proposal(self, generator, mock_claude_client, sample_proposal):
        mock_claude_client.complete.return_value = "  # Statement of Work\n\nScope...  "

        document = await generator.generate(
            sample_proposal,
            DocumentRequest(document_type=DocumentType.SOW, session_id="s-1"),
        )

        assert document.id.startswith("DOC-")
        assert document.title == "Statement of Work"
        assert document.content == "# Statement of Work\n\nScope..."
        assert document.proposal_id == sample_proposal.id
        assert document.client_name == "Acme Coffee"
        assert document.session_id == "s-1"

        prompt = _prompt(mock_claude_client)
        assert "Statement of Work" in prompt
        assert "Creative Services - $1,800.00" in prompt
        assert "Creative Design: 10h @ $150.00/hr = $1,500.00" in prompt

    async def test_brief_overrides_client_and_budget(self, generator, mock_claude_client, sample_proposal):
        mock_claude_client.complete.return_value = "# Brief"

        document = await generator.generate(
            sample_proposal,
            DocumentRequest(document_type=DocumentType.BRIEF, client_name="Globex", budget=12000),
        )

        assert document.title == "Client Brief"
        assert document.client_name == "Globex"
        prompt = _prompt(mock_claude_client)
        assert "CLIENT: Globex" in prompt
        assert "BUDGET: $12,000" in prompt

    async def test_proposal_required(self, generator, mock_claude_client):
        with pytest.raises(InputValidationError):
            await generator.generate(None, DocumentRequest(document_type=DocumentType.SOW))

        mock_claude_client.complete.assert_not_called()

    async def test_empty_response(self, generator, mock_claude_client, sample_proposal):
        mock_claude_client.complete.return_value = "   "

        with pytest.raises(GenerationError):
            await generator.generate(sample_proposal, DocumentRequest(document_type=DocumentType.SOW))


class TestUploadDocuments:
    def _request(self, **overrides):
        values = dict(
            document_type=DocumentType.TIMELINE,
            client_name="Acme",
            project_type="Website",
            deadline=date(2025, 3, 15),
            documents=["--- brief.txt ---\nNeed a new site"],
        )
        values.update(overrides)
        return DocumentRequest(**values)

    async def test_timeline_prompt(self, generator, mock_claude_client):
        mock_claude_client.complete.return_value = "Week 1: Discovery"

        document = await generator.generate(None, self._request())

        assert document.document_type == DocumentType.TIMELINE
        assert document.proposal_id is None
        prompt = _prompt(mock_claude_client)
        assert "DEADLINE: March 15, 2025" in prompt
        assert "--- brief.txt ---" in prompt
        assert "- Creative Design: $150/hour" in prompt
        assert mock_claude_client.complete.call_args.kwargs["max_tokens"] == 1500

    async def test_missing_fields(self, generator, mock_claude_client):
        with pytest.raises(InputValidationError) as exc_info:
            await generator.generate(None, self._request(client_name=None, deadline=None))

        assert exc_info.value.details["missing"] == ["clientName", "deadline"]
        mock_claude_client.complete.assert_not_called()

    async def test_no_document_text(self, generator):
        with pytest.raises(InputValidationError):
            await generator.generate(None, self._request(documents=[]))


class TestEditSow:
    async def test_returns_edited_text(self, generator, mock_claude_client):
        mock_claude_client.complete.return_value = "# SOW v2\n"

        result = await generator.edit_sow("# SOW", "Add a payment schedule")

        assert result == "# SOW v2"
        prompt = _prompt(mock_claude_client)
        assert "# SOW" in prompt
        assert "Add a payment schedule" in prompt

    @pytest.mark.parametrize("sow, instruction", [("", "edit"), ("# SOW", "  ")])
    async def test_missing_input(self, generator, mock_claude_client, sow, instruction):
        with pytest.raises(InputValidationError):
            await generator.edit_sow(sow, instruction)

        mock_claude_client.complete.assert_not_called()

    async def test_empty_result(self, generator, mock_claude_client):
        mock_claude_client.complete.return_value = ""

        with pytest.raises(GenerationError):
            await generator.edit_sow("# SOW", "shorter")


def test_format_deadline():
    assert format_deadline(date(2025, 3, 5)) == "March 5, 2025"


def test_summary_without_phases(sample_proposal):
    empty = sample_proposal.model_copy(update={"phases": [], "total": 0, "budget": 0})

    summary = build_proposal_summary(empty)

    assert "BUDGET: Not specified" in summary
    assert "(no phases)" in summary
