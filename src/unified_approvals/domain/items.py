"""The normalized projection every request kind is funneled into."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from unified_approvals.domain.entities import RequestEntity, RequestKind


class Action(str, Enum):
    APPROVE = "Approve"
    REJECT = "Reject"
    PAY = "Pay"


class Tab(str, Enum):
    PENDING = "pending"
    HISTORY = "history"


ITEM_ID_PREFIXES: dict[RequestKind, str] = {
    RequestKind.EXPENSE: "EXP",
    RequestKind.CLAIM: "CLM",
    RequestKind.LEAVE: "LEV",
    RequestKind.PURCHASE_ORDER: "PO",
    RequestKind.HR_LETTER: "LTR",
}

_KINDS_BY_PREFIX = {prefix: kind for kind, prefix in ITEM_ID_PREFIXES.items()}


def make_item_id(kind: RequestKind, original_id: str) -> str:
    return f"{ITEM_ID_PREFIXES[kind]}_{original_id}"


def split_item_id(item_id: str) -> tuple[RequestKind, str]:
    """Split a composite item id into its kind and original id.

    Raises ValueError for ids without a known kind prefix.
    """
    prefix, sep, original_id = item_id.partition("_")
    kind = _KINDS_BY_PREFIX.get(prefix)
    if not sep or kind is None or not original_id:
        raise ValueError(f"Malformed approval item id: {item_id!r}")
    return kind, original_id


@dataclass(frozen=True)
class ApprovalItem:
    id: str
    kind: RequestKind
    requester_name: str
    title: str
    subtitle: str
    date: str
    status: str
    original_id: str
    details: RequestEntity
    requester_id: str | None = None
    avatar_url: str | None = None
    amount: float | None = None
