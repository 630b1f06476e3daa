"""Processing layers for proposal generation pipeline."""

# Note: Import layers individually to avoid circular imports
# Use: from app.layers.layer1_suggestion import BriefAnalyzer, SuggestionParser
# Use: from app.layers.layer2_reconciliation import ProposalReconciler
# Use: from app.layers.layer3_recalculation import apply_field_edit, PromptEditor
# Use: from app.layers.layer4_documents import DocumentGenerator

__all__ = [
    "layer1_suggestion",
    "layer2_reconciliation",
    "layer3_recalculation",
    "layer4_documents",
]
