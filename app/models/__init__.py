"""Data models for proposal generation system."""

from .common import CamelModel, round_currency, coerce_number
from .input import InputDocument, InputType, InputMetadata, EXTENSION_TYPES
from .catalog import Service, Package, PackagePhase, PackageLineItem
from .suggestion import Suggestion, SuggestedPackage, SuggestedRole, CustomBuild
from .proposal import LineItem, Phase, Proposal, ProposalContext
from .session import ProposalSession, WorkflowStep, StepChange
from .documents import (
    DocumentType,
    DOCUMENT_TITLES,
    GeneratedDocument,
    markdown_to_word_html,
)

__all__ = [
    # Common
    "CamelModel",
    "round_currency",
    "coerce_number",
    # Input models
    "InputDocument",
    "InputType",
    "InputMetadata",
    "EXTENSION_TYPES",
    # Catalog models
    "Service",
    "Package",
    "PackagePhase",
    "PackageLineItem",
    # Suggestion models
    "Suggestion",
    "SuggestedPackage",
    "SuggestedRole",
    "CustomBuild",
    # Proposal models
    "LineItem",
    "Phase",
    "Proposal",
    "ProposalContext",
    # Session models
    "ProposalSession",
    "WorkflowStep",
    "StepChange",
    # Document models
    "DocumentType",
    "DOCUMENT_TITLES",
    "GeneratedDocument",
    "markdown_to_word_html",
]
