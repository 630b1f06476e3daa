"""API endpoints package."""

from . import health
from . import uploads
from . import catalog
from . import proposals
from . import documents
from . import sessions

__all__ = ["health", "uploads", "catalog", "proposals", "documents", "sessions"]
