"""FileStorage 단위 테스트 (임시 디렉토리 사용)."""

from app.models import (
    DocumentType,
    GeneratedDocument,
    ProposalContext,
    ProposalSession,
    Suggestion,
    WorkflowStep,
)


class TestProposals:
    async def test_save_and_get(self, temp_storage, sample_proposal):
        proposal_id = await temp_storage.save_proposal(sample_proposal)

        loaded = await temp_storage.get_proposal(proposal_id)

        assert loaded is not None
        assert loaded.id == "PROP-20250101-abc123"
        assert loaded.phases[0].line_items[0].cost == 1500
        assert loaded.subtotal == 2300

    async def test_stored_as_camel_case(self, temp_storage, sample_proposal):
        await temp_storage.save_proposal(sample_proposal)

        raw = (temp_storage.proposals_path / f"{sample_proposal.id}.json").read_text(encoding="utf-8")

        assert '"lineItems"' in raw
        assert '"clientName"' in raw

    async def test_get_missing(self, temp_storage):
        assert await temp_storage.get_proposal("PROP-missing") is None

    async def test_list_with_client_filter(self, temp_storage, sample_proposal):
        await temp_storage.save_proposal(sample_proposal)
        other = sample_proposal.model_copy(update={"id": "PROP-20250101-def456", "client_name": "Globex"})
        await temp_storage.save_proposal(other)

        everything = await temp_storage.list_proposals()
        acme = await temp_storage.list_proposals(client_name="acme coffee")

        assert len(everything) == 2
        assert [p.id for p in acme] == ["PROP-20250101-abc123"]

    async def test_list_pagination(self, temp_storage, sample_proposal):
        for i in range(3):
            await temp_storage.save_proposal(sample_proposal.model_copy(update={"id": f"PROP-{i}"}))

        assert len(await temp_storage.list_proposals(skip=1, limit=5)) == 2
        assert len(await temp_storage.list_proposals(limit=1)) == 1

    async def test_delete(self, temp_storage, sample_proposal):
        await temp_storage.save_proposal(sample_proposal)

        assert await temp_storage.delete_proposal(sample_proposal.id) is True
        assert await temp_storage.delete_proposal(sample_proposal.id) is False
        assert await temp_storage.get_proposal(sample_proposal.id) is None

    async def test_corrupted_file_returns_none(self, temp_storage):
        (temp_storage.proposals_path / "PROP-bad.json").write_text("{not json", encoding="utf-8")

        assert await temp_storage.get_proposal("PROP-bad") is None


class TestSessions:
    async def test_round_trip_keeps_step(self, temp_storage, sample_proposal):
        session = ProposalSession()
        session.begin_analysis(ProposalContext(client_name="Acme", budget=8000), ["doc-001"])
        session.complete_analysis(Suggestion(reasoning="fits"), sample_proposal)

        await temp_storage.save_session(session)
        loaded = await temp_storage.get_session(session.session_id)

        assert loaded.step == WorkflowStep.REVIEW
        assert loaded.suggestion.reasoning == "fits"
        assert loaded.proposal.id == sample_proposal.id
        assert loaded.document_ids == ["doc-001"]

    async def test_delete(self, temp_storage):
        session = ProposalSession()
        await temp_storage.save_session(session)

        assert await temp_storage.delete_session(session.session_id) is True
        assert await temp_storage.get_session(session.session_id) is None


class TestDocuments:
    async def test_save_and_get(self, temp_storage):
        document = GeneratedDocument(
            id="DOC-20250101-aaaaaa",
            document_type=DocumentType.SOW,
            title="Statement of Work",
            content="# SOW",
            client_name="Acme",
        )

        await temp_storage.save_document(document)
        loaded = await temp_storage.get_document(document.id)

        assert loaded.document_type == DocumentType.SOW
        assert loaded.content == "# SOW"


class TestUploads:
    async def test_save_and_read_upload(self, temp_storage):
        path = await temp_storage.save_upload(b"hello", "brief.txt", "doc-001")

        assert path.endswith("brief.txt")
        assert await temp_storage.get_upload("doc-001", "brief.txt") == b"hello"
        assert await temp_storage.get_upload("doc-001", "other.txt") is None

    async def test_input_document_metadata(self, temp_storage, sample_input_document):
        await temp_storage.save_input_document(sample_input_document)

        loaded = await temp_storage.get_input_document("doc-001")
        listed = await temp_storage.list_input_documents()

        assert loaded.extracted_text == sample_input_document.extracted_text
        assert loaded.has_text is True
        assert [d.id for d in listed] == ["doc-001"]

    async def test_delete_upload(self, temp_storage, sample_input_document):
        await temp_storage.save_upload(b"hello", "brief.txt", "doc-001")
        await temp_storage.save_input_document(sample_input_document)

        assert await temp_storage.delete_upload("doc-001") is True
        assert await temp_storage.get_input_document("doc-001") is None
        assert await temp_storage.delete_upload("doc-001") is False
