"""Prompts for natural-language proposal edits."""

EDIT_PROPOSAL_SYSTEM_PROMPT = """You are editing a proposal. The user wants to make changes via natural language."""

EDIT_PROPOSAL_TASK_PROMPT = """TASK:
Modify the proposal according to the user's request. You can:
- Add/remove line items
- Adjust hours or rates
- Add/remove phases
- Recalculate totals

Return the COMPLETE updated proposal as JSON with the same structure. Make sure to:
1. Recalculate all costs (cost = hours * rate)
2. Recalculate phase totals
3. Recalculate subtotal and total
4. Mark edited items with isEdited: true
5. Keep the existing "id" of every phase and line item you do not remove

Return ONLY the JSON, no explanation."""
