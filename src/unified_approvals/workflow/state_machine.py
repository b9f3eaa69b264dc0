"""Per-kind transition tables.

Each request kind has its own table keyed by ``(current status, action)``.
A generic Approve/Reject/Pay is translated into the kind's resulting status
plus the side-effect fields that go with it. Anything not in a table is an
invalid transition.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from unified_approvals.domain.entities import (
    ClaimStatus,
    ExpenseStatus,
    LeaveStatus,
    LetterStatus,
    PurchaseOrderStatus,
    RequestEntity,
    RequestKind,
)
from unified_approvals.domain.items import Action
from unified_approvals.errors import InvalidTransitionError, RejectionReasonRequired
from unified_approvals.utils.time import iso_date, local_now, locale_date

logger = logging.getLogger(__name__)

DateFormat = Literal["locale", "iso"]


@dataclass(frozen=True)
class _Context:
    now: datetime
    date_format: DateFormat
    reason: str | None
    comment: str | None

    @property
    def stamp(self) -> str:
        if self.date_format == "iso":
            return iso_date(self.now)
        return locale_date(self.now)


SideEffects = Callable[[_Context], dict[str, Any]]


@dataclass(frozen=True)
class _Rule:
    target: str
    effects: SideEffects


@dataclass(frozen=True)
class Transition:
    kind: RequestKind
    entity_id: str
    action: Action
    from_status: str
    new_status: str
    changes: Mapping[str, Any] = field(default_factory=dict)


def _no_effects(_: _Context) -> dict[str, Any]:
    return {}


def _rejection(ctx: _Context) -> dict[str, Any]:
    return {"rejection_reason": ctx.reason}


def _claim_approval(ctx: _Context) -> dict[str, Any]:
    return {
        "approval_date": ctx.stamp,
        "approver_comment": ctx.comment,
        "rejection_reason": None,
    }


def _claim_payment(ctx: _Context) -> dict[str, Any]:
    return {"paid_date": ctx.stamp}


def _leave_approval(ctx: _Context) -> dict[str, Any]:
    return {"approval_date": ctx.stamp, "rejection_reason": None}


def _letter_approval(ctx: _Context) -> dict[str, Any]:
    # The letters view always issues with an ISO date, independent of the stamp form.
    return {
        "approval_date": ctx.stamp,
        "date_issued": iso_date(ctx.now),
        "rejection_reason": None,
    }


def _letter_rejection(ctx: _Context) -> dict[str, Any]:
    return {"rejection_reason": ctx.reason, "date_issued": None}


TRANSITION_TABLES: dict[RequestKind, dict[tuple[str, Action], _Rule]] = {
    RequestKind.CLAIM: {
        (ClaimStatus.SUBMITTED.value, Action.APPROVE): _Rule(
            ClaimStatus.APPROVED.value, _claim_approval
        ),
        (ClaimStatus.SUBMITTED.value, Action.REJECT): _Rule(
            ClaimStatus.REJECTED.value, _rejection
        ),
        (ClaimStatus.APPROVED.value, Action.PAY): _Rule(ClaimStatus.PAID.value, _claim_payment),
    },
    RequestKind.EXPENSE: {
        (ExpenseStatus.PENDING.value, Action.APPROVE): _Rule(
            ExpenseStatus.SCHEDULED.value, _no_effects
        ),
        (ExpenseStatus.PENDING.value, Action.REJECT): _Rule(
            ExpenseStatus.FAILED.value, _rejection
        ),
    },
    RequestKind.LEAVE: {
        (LeaveStatus.PENDING.value, Action.APPROVE): _Rule(
            LeaveStatus.APPROVED.value, _leave_approval
        ),
        (LeaveStatus.PENDING.value, Action.REJECT): _Rule(LeaveStatus.REJECTED.value, _rejection),
    },
    RequestKind.PURCHASE_ORDER: {
        (PurchaseOrderStatus.DRAFT.value, Action.APPROVE): _Rule(
            PurchaseOrderStatus.ORDERED.value, _no_effects
        ),
        (PurchaseOrderStatus.DRAFT.value, Action.REJECT): _Rule(
            PurchaseOrderStatus.CANCELLED.value, _rejection
        ),
    },
    RequestKind.HR_LETTER: {
        (LetterStatus.PENDING.value, Action.APPROVE): _Rule(
            LetterStatus.APPROVED.value, _letter_approval
        ),
        (LetterStatus.PENDING.value, Action.REJECT): _Rule(
            LetterStatus.REJECTED.value, _letter_rejection
        ),
    },
}

_STATUS_TYPES = {
    RequestKind.CLAIM: ClaimStatus,
    RequestKind.EXPENSE: ExpenseStatus,
    RequestKind.LEAVE: LeaveStatus,
    RequestKind.PURCHASE_ORDER: PurchaseOrderStatus,
    RequestKind.HR_LETTER: LetterStatus,
}


def status_value(status: object) -> str:
    return getattr(status, "value", status)


def allowed_actions(entity: RequestEntity) -> list[Action]:
    """Actions the table defines from the entity's current status."""
    current = status_value(entity.status)
    table = TRANSITION_TABLES[entity.kind]
    return [action for (status, action) in table if status == current]


def is_terminal(kind: RequestKind, status: str) -> bool:
    return not any(current == status_value(status) for current, _ in TRANSITION_TABLES[kind])


def transition(
    entity: RequestEntity,
    action: Action,
    *,
    reason: str | None = None,
    comment: str | None = None,
    now: datetime | None = None,
    date_format: DateFormat = "locale",
) -> Transition:
    """Compute the result of ``action`` on ``entity`` without touching it.

    Raises InvalidTransitionError when the kind's table has no entry for the
    current status, and RejectionReasonRequired for a blank reject reason.
    """
    action = Action(action)
    current = status_value(entity.status)
    rule = TRANSITION_TABLES[entity.kind].get((current, action))
    if rule is None:
        raise InvalidTransitionError(entity.kind.value, entity.id, current, action.value)

    cleaned_reason = reason.strip() if reason else ""
    if action == Action.REJECT and not cleaned_reason:
        raise RejectionReasonRequired(entity.id)

    cleaned_comment = comment.strip() if comment else ""
    ctx = _Context(
        now=now or local_now(),
        date_format=date_format,
        reason=cleaned_reason or None,
        comment=cleaned_comment or None,
    )
    return Transition(
        kind=entity.kind,
        entity_id=entity.id,
        action=action,
        from_status=current,
        new_status=rule.target,
        changes=rule.effects(ctx),
    )


def apply_transition(entity: RequestEntity, result: Transition) -> RequestEntity:
    """Build the replacement record for ``entity``.

    Refuses when the entity no longer has the status the transition was
    computed from.
    """
    if entity.id != result.entity_id or entity.kind != result.kind:
        raise ValueError(f"Transition for '{result.entity_id}' applied to '{entity.id}'")
    current = status_value(entity.status)
    if current != result.from_status:
        raise InvalidTransitionError(entity.kind.value, entity.id, current, result.action.value)
    new_status = _STATUS_TYPES[entity.kind](result.new_status)
    updated = dataclasses.replace(entity, status=new_status, **dict(result.changes))
    logger.info(
        "%s %s: %s -> %s (%s)",
        entity.kind.value,
        entity.id,
        result.from_status,
        result.new_status,
        result.action.value,
    )
    return updated
