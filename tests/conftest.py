"""공유 pytest fixture 모음."""

import pytest
from unittest.mock import AsyncMock

from app.models import (
    InputDocument,
    InputMetadata,
    InputType,
    LineItem,
    Package,
    PackageLineItem,
    PackagePhase,
    Phase,
    Proposal,
    ProposalContext,
    Service,
)


@pytest.fixture
def mock_claude_client():
    """ClaudeClient mock fixture."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value="mocked response")
    return client


@pytest.fixture
def abc_services():
    """A/B/C 세 개 서비스만 있는 카탈로그."""
    return [
        Service(service_name="A", category="creative", default_rate=100),
        Service(service_name="B", category="creative", default_rate=150),
        Service(service_name="C", category="creative", default_rate=200),
    ]


@pytest.fixture
def branding_package():
    """Branding Tier I 패키지 (합계 $6,050, 항목 6개)."""
    return Package(
        id="branding-tier-i",
        name="Branding Tier I",
        service_type="branding",
        tier_level="I",
        total_cost=6050,
        is_fixed_package=True,
        phases=[
            PackagePhase(
                name="Discovery",
                total_cost=2100,
                line_items=[
                    PackageLineItem(name="Brand Discovery Session", hours=10, rate=150, cost=1500),
                    PackageLineItem(name="Competitive Review", hours=4, rate=150, cost=600),
                ],
            ),
            PackagePhase(
                name="Logo Design",
                total_cost=2700,
                line_items=[
                    PackageLineItem(name="Logo Concepts", hours=12, rate=150, cost=1800),
                    PackageLineItem(name="Logo Revisions", hours=6, rate=150, cost=900),
                ],
            ),
            PackagePhase(
                name="Brand Guidelines",
                total_cost=1250,
                line_items=[
                    PackageLineItem(name="Color & Typography", hours=5, rate=150, cost=750),
                    PackageLineItem(name="Account Service", hours=5, rate=100, cost=500),
                ],
            ),
        ],
    )


@pytest.fixture
def sample_context():
    return ProposalContext(
        client_name="Acme Coffee",
        budget=8000,
        project_type="Branding",
    )


@pytest.fixture
def sample_proposal():
    """단계 2개, 항목 3개짜리 제안서 (합계 $2,300)."""
    return Proposal(
        id="PROP-20250101-abc123",
        client_name="Acme Coffee",
        project_type="Branding",
        budget=8000,
        phases=[
            Phase(
                id="phase-00000001",
                name="Creative Services",
                total_cost=1800,
                line_items=[
                    LineItem(id="item-00000001", name="Creative Design", hours=10, rate=150, cost=1500),
                    LineItem(id="item-00000002", name="Copywriting", hours=2, rate=150, cost=300),
                ],
            ),
            Phase(
                id="phase-00000002",
                name="Management Services",
                total_cost=500,
                line_items=[
                    LineItem(id="item-00000003", name="Account Service", hours=5, rate=100, cost=500),
                ],
            ),
        ],
        subtotal=2300,
        total=2300,
    )


@pytest.fixture
def sample_input_document():
    """텍스트가 추출된 InputDocument fixture."""
    return InputDocument(
        id="doc-001",
        input_type=InputType.TEXT,
        filename="brief.txt",
        extracted_text="Acme Coffee needs a new logo and brand guidelines.",
        metadata=InputMetadata(filename="brief.txt", size_bytes=51),
    )


@pytest.fixture
def temp_storage(tmp_path):
    """임시 디렉토리 기반 FileStorage fixture."""
    from app.services.file_storage import FileStorage
    return FileStorage(base_path=str(tmp_path))
