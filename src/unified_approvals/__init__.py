"""Unified approval and claims workflow engine."""

from unified_approvals.domain.entities import (
    Claim,
    ClaimStatus,
    Expense,
    HRLetter,
    LeaveRequest,
    PurchaseItem,
    PurchaseOrder,
    RequestKind,
)
from unified_approvals.domain.items import Action, ApprovalItem, Tab
from unified_approvals.engine import ApprovalEngine
from unified_approvals.workflow.store import EntityCollections, EntityStore

__all__ = [
    "Action",
    "ApprovalEngine",
    "ApprovalItem",
    "Claim",
    "ClaimStatus",
    "EntityCollections",
    "EntityStore",
    "Expense",
    "HRLetter",
    "LeaveRequest",
    "PurchaseItem",
    "PurchaseOrder",
    "RequestKind",
    "Tab",
]
