"""API 통합 테스트용 fixture.

임시 저장소와 mock Claude 클라이언트를 쓰는 오케스트레이터로 의존성을 교체합니다.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.services.catalog_store import CatalogStore
from app.services.file_storage import get_file_storage
from app.services.orchestrator import ProposalOrchestrator, get_orchestrator
from app.services.text_extractor import TextExtractor


@pytest.fixture
def orchestrator(mock_claude_client, temp_storage):
    return ProposalOrchestrator(
        claude_client=mock_claude_client,
        storage=temp_storage,
        catalog=CatalogStore(),
        extractor=TextExtractor(),
    )


@pytest.fixture
async def client(orchestrator, temp_storage):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_file_storage] = lambda: temp_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
