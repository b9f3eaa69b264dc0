"""Claim submission: the one place the engine creates a record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from unified_approvals.domain.entities import Claim, ClaimCategory, ClaimStatus, RequestKind
from unified_approvals.policy.engine import PolicyEngine
from unified_approvals.utils.time import local_now, locale_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Employee:
    id: str
    name: str
    avatar_url: str | None = None


@dataclass(frozen=True)
class ClaimDraft:
    employee_id: str
    description: str
    amount: float | None
    date: str
    category: ClaimCategory
    notes: str | None = None
    receipt_url: str | None = None


def submit_claim(
    draft: ClaimDraft,
    *,
    employee: Employee | None,
    policy: PolicyEngine,
    now: datetime | None = None,
) -> Claim:
    """Build a Submitted claim, stamping the submission-stage policy warning."""
    moment = now or local_now()
    warning = policy.evaluate(draft.amount, RequestKind.CLAIM, "submission")
    claim = Claim(
        id=f"CLM-{int(moment.timestamp() * 1000)}",
        employee_id=draft.employee_id,
        employee_name=employee.name if employee else "Unknown",
        avatar_url=(employee.avatar_url or "") if employee else "",
        description=draft.description,
        amount=draft.amount,
        date=draft.date,
        category=ClaimCategory(draft.category),
        status=ClaimStatus.SUBMITTED,
        notes=draft.notes,
        receipt_url=draft.receipt_url,
        policy_warning=warning,
        submission_date=locale_date(moment),
    )
    if warning:
        logger.info("Claim %s flagged at submission: %s", claim.id, warning)
    return claim
