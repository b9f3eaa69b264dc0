from __future__ import annotations

from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from unified_approvals.domain.entities import Claim, ClaimStatus, RequestKind
from unified_approvals.workflow.store import EntityCollections, EntityStore


def test_replace_swaps_record_in_place(claim: Claim) -> None:
    other = replace(claim, id="CLM-2")
    on_change = MagicMock()
    store = EntityStore([claim, other], on_change=on_change)
    before = store.all()

    updated = store.replace("CLM-1", lambda c: replace(c, status=ClaimStatus.APPROVED))

    assert [c.id for c in store] == ["CLM-1", "CLM-2"]
    assert store.get("CLM-1") is updated
    assert before[0] is claim
    on_change.assert_called_once_with(store.all())


def test_failed_updater_leaves_store_untouched(claim: Claim) -> None:
    on_change = MagicMock()
    store = EntityStore([claim], on_change=on_change)

    def _boom(_: Claim) -> Claim:
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        store.replace("CLM-1", _boom)

    assert store.get("CLM-1") is claim
    on_change.assert_not_called()


def test_replace_unknown_id_raises_key_error(claim: Claim) -> None:
    with pytest.raises(KeyError):
        EntityStore([claim]).replace("CLM-9", lambda c: c)


def test_updater_may_not_change_id(claim: Claim) -> None:
    store = EntityStore([claim])
    with pytest.raises(ValueError, match="changed record id"):
        store.replace("CLM-1", lambda c: replace(c, id="CLM-X"))


def test_prepend_rejects_duplicates(claim: Claim) -> None:
    store = EntityStore([claim])
    newer = replace(claim, id="CLM-0")

    store.prepend(newer)
    assert [c.id for c in store] == ["CLM-0", "CLM-1"]
    assert len(store) == 2
    with pytest.raises(ValueError, match="Duplicate record id"):
        store.prepend(claim)


def test_collections_lookup(collections: EntityCollections) -> None:
    assert collections.store_for(RequestKind.LEAVE) is collections.leave_requests
    assert collections.find(RequestKind.PURCHASE_ORDER, "PO-9").vendor_name == "Office Depot"
    assert collections.find(RequestKind.CLAIM, "missing") is None
