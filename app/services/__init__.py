"""Services for proposal generation system.

ProposalOrchestrator는 레이어 모듈을 import 하므로 순환 참조를 피하기 위해
app.services.orchestrator 에서 직접 import 합니다.
"""

from .claude_client import ClaudeClient, get_claude_client
from .file_storage import FileStorage, get_file_storage
from .catalog_store import CatalogStore, get_catalog_store
from .text_extractor import TextExtractor, get_text_extractor, frame_documents

__all__ = [
    "ClaudeClient",
    "get_claude_client",
    "FileStorage",
    "get_file_storage",
    "CatalogStore",
    "get_catalog_store",
    "TextExtractor",
    "get_text_extractor",
    "frame_documents",
]
