"""Layer 1: Suggestion - client brief analysis and suggestion parsing."""

from .suggestion_parser import SuggestionParser, parse_suggestion
from .brief_analyzer import BriefAnalyzer, BriefMaterials

__all__ = [
    "SuggestionParser",
    "parse_suggestion",
    "BriefAnalyzer",
    "BriefMaterials",
]
