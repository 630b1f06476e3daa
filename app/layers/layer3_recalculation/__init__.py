"""Layer 3: Recalculation - cost invariants, field edits and prompt edits."""

from .recalculator import recalculate, apply_field_edit, EDITABLE_FIELDS
from .prompt_editor import PromptEditor, apply_prompt_edit

__all__ = [
    "recalculate",
    "apply_field_edit",
    "EDITABLE_FIELDS",
    "PromptEditor",
    "apply_prompt_edit",
]
