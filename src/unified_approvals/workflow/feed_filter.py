"""Pending/history partitioning, kind filtering and free-text search."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from unified_approvals.domain.entities import Claim, ClaimStatus, RequestKind
from unified_approvals.domain.items import ApprovalItem, Tab
from unified_approvals.utils.time import parse_display_date
from unified_approvals.workflow.state_machine import status_value

# Statuses awaiting review. Every other status of a kind is resolved.
PENDING_STATUSES: dict[RequestKind, frozenset[str]] = {
    RequestKind.CLAIM: frozenset({"Submitted"}),
    RequestKind.EXPENSE: frozenset({"Pending"}),
    RequestKind.LEAVE: frozenset({"Pending"}),
    RequestKind.PURCHASE_ORDER: frozenset({"Draft"}),
    RequestKind.HR_LETTER: frozenset({"Pending"}),
}

FAVOURABLE_STATUSES = frozenset({"Approved", "Paid", "Scheduled"})


def classify(kind: RequestKind, status: str) -> Tab:
    if status_value(status) in PENDING_STATUSES[kind]:
        return Tab.PENDING
    return Tab.HISTORY


def matches_query(item: ApprovalItem, query: str) -> bool:
    needle = query.strip().casefold()
    if not needle:
        return True
    return any(
        needle in value.casefold()
        for value in (item.title, item.requester_name, item.original_id)
    )


def filter_feed(
    feed: Iterable[ApprovalItem],
    tab: Tab = Tab.PENDING,
    kind: RequestKind | None = None,
    query: str = "",
) -> list[ApprovalItem]:
    """Narrow the feed to one tab, optionally one kind and a search query."""
    tab = Tab(tab)
    return [
        item
        for item in feed
        if classify(item.kind, item.status) == tab
        and (kind is None or item.kind == kind)
        and matches_query(item, query)
    ]


def partition(feed: Iterable[ApprovalItem]) -> tuple[list[ApprovalItem], list[ApprovalItem]]:
    pending: list[ApprovalItem] = []
    history: list[ApprovalItem] = []
    for item in feed:
        (pending if classify(item.kind, item.status) == Tab.PENDING else history).append(item)
    return pending, history


@dataclass(frozen=True)
class FeedSummary:
    pending: int
    resolved_today: int


def summarize(feed: Sequence[ApprovalItem], today: date) -> FeedSummary:
    pending = sum(1 for item in feed if classify(item.kind, item.status) == Tab.PENDING)
    resolved_today = sum(
        1
        for item in feed
        if item.status in FAVOURABLE_STATUSES and parse_display_date(item.date) == today
    )
    return FeedSummary(pending=pending, resolved_today=resolved_today)


@dataclass(frozen=True)
class ClaimTotals:
    pending: float
    approved: float
    paid: float


def claim_totals(claims: Iterable[Claim]) -> ClaimTotals:
    totals = {
        ClaimStatus.SUBMITTED.value: 0.0,
        ClaimStatus.APPROVED.value: 0.0,
        ClaimStatus.PAID.value: 0.0,
    }
    for claim in claims:
        key = status_value(claim.status)
        if key in totals:
            totals[key] += claim.amount or 0.0
    return ClaimTotals(
        pending=totals[ClaimStatus.SUBMITTED.value],
        approved=totals[ClaimStatus.APPROVED.value],
        paid=totals[ClaimStatus.PAID.value],
    )


def split_by_owner(claims: Iterable[Claim], user_id: str) -> tuple[list[Claim], list[Claim]]:
    """Split claims into the user's own and the ones they review."""
    own: list[Claim] = []
    team: list[Claim] = []
    for claim in claims:
        (own if claim.employee_id == user_id else team).append(claim)
    return own, team
