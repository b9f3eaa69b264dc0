from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from unified_approvals.domain.entities import (
    ClaimStatus,
    ExpenseStatus,
    LeaveStatus,
    LetterStatus,
    PurchaseOrderStatus,
    RequestKind,
)
from unified_approvals.domain.items import Tab
from unified_approvals.workflow.aggregator import build_feed
from unified_approvals.workflow.feed_filter import (
    claim_totals,
    classify,
    filter_feed,
    partition,
    split_by_owner,
    summarize,
)
from unified_approvals.workflow.store import EntityCollections

_VOCABULARIES = {
    RequestKind.CLAIM: ClaimStatus,
    RequestKind.EXPENSE: ExpenseStatus,
    RequestKind.LEAVE: LeaveStatus,
    RequestKind.PURCHASE_ORDER: PurchaseOrderStatus,
    RequestKind.HR_LETTER: LetterStatus,
}


@pytest.mark.parametrize("kind", list(RequestKind))
def test_classification_is_total_and_exclusive(kind: RequestKind) -> None:
    for status in _VOCABULARIES[kind]:
        assert classify(kind, status.value) in (Tab.PENDING, Tab.HISTORY)

    pending = [s for s in _VOCABULARIES[kind] if classify(kind, s.value) == Tab.PENDING]
    assert len(pending) == 1


def test_partitions_are_disjoint(collections: EntityCollections) -> None:
    feed = build_feed(collections)
    pending, history = partition(feed)

    assert {i.id for i in pending}.isdisjoint({i.id for i in history})
    assert len(pending) + len(history) == len(feed)
    assert [i.id for i in history] == ["CLM_CLM-2"]


def test_search_is_case_insensitive(collections: EntityCollections) -> None:
    feed = build_feed(collections)
    lower = filter_feed(feed, Tab.PENDING, query="bob")
    upper = filter_feed(feed, Tab.PENDING, query="BOB")

    assert [i.id for i in lower] == [i.id for i in upper] == ["CLM_CLM-1"]


def test_search_covers_title_and_original_id(collections: EntityCollections) -> None:
    feed = build_feed(collections)
    assert [i.id for i in filter_feed(feed, Tab.PENDING, query="office")] == ["PO_PO-9"]
    assert [i.id for i in filter_feed(feed, Tab.PENDING, query="lr-1")] == ["LEV_LR-1"]


def test_kind_filter_and_query_compose(collections: EntityCollections) -> None:
    feed = build_feed(collections)
    assert filter_feed(feed, Tab.PENDING, kind=RequestKind.CLAIM, query="office") == []
    claims = filter_feed(feed, Tab.PENDING, kind=RequestKind.CLAIM)
    assert [i.id for i in claims] == ["CLM_CLM-1"]


def test_history_tab(collections: EntityCollections) -> None:
    feed = build_feed(collections)
    assert [i.id for i in filter_feed(feed, Tab.HISTORY, query="uber")] == ["CLM_CLM-2"]


def test_summary_counts_pending_and_resolved_today(collections: EntityCollections) -> None:
    today_claim = replace(
        collections.claims.get("CLM-2"), id="CLM-3", date="10/19/2026"
    )
    collections.claims.prepend(today_claim)
    summary = summarize(build_feed(collections), date(2026, 10, 19))

    assert summary.pending == 5
    assert summary.resolved_today == 1


def test_claim_totals_and_owner_split(collections: EntityCollections) -> None:
    totals = claim_totals(collections.claims)
    assert totals.pending == 1500
    assert totals.approved == 45.0
    assert totals.paid == 0.0

    own, team = split_by_owner(collections.claims, "e1")
    assert [c.id for c in own] == ["CLM-2"]
    assert [c.id for c in team] == ["CLM-1"]
