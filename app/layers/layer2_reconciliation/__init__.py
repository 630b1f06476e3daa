"""Layer 2: Reconciliation - suggestion + catalog to a complete proposal."""

from .reconciler import ProposalReconciler, category_title
from .id_allocator import IdAllocator, ensure_ids, new_proposal_id

__all__ = [
    "ProposalReconciler",
    "category_title",
    "IdAllocator",
    "ensure_ids",
    "new_proposal_id",
]
