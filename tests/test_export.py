from __future__ import annotations

import csv
import io
from dataclasses import replace

from unified_approvals.domain.entities import Claim
from unified_approvals.workflow.aggregator import build_feed
from unified_approvals.workflow.export import (
    CLAIM_COLUMNS,
    FEED_COLUMNS,
    export_claims_csv,
    export_feed_csv,
)
from unified_approvals.workflow.store import EntityCollections


def test_feed_export_header_and_rows(collections: EntityCollections) -> None:
    text = export_feed_csv(build_feed(collections))
    lines = text.split("\n")

    assert lines[0] == "ID,Requester,Category,Date,Amount,Status"
    assert lines[1] == "CLM-1,Bob Smith,Claim,2024-11-12,1500,Submitted"
    assert lines[2] == "PO-9,Procurement,Purchase Order,2024-11-12,6200,Draft"
    assert lines[-1] == "LR-1,James Wilson,Leave,2024-11-01,0,Pending"
    assert not text.endswith("\n")


def test_empty_export_is_header_only() -> None:
    assert export_feed_csv([]) == ",".join(FEED_COLUMNS)
    assert export_claims_csv([]) == ",".join(CLAIM_COLUMNS)


def test_fields_with_commas_are_quoted(claim: Claim) -> None:
    awkward = replace(claim, employee_name='Smith, Bob "BS"', amount=12.5)
    text = export_claims_csv([awkward])

    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == list(CLAIM_COLUMNS)
    assert rows[1] == ["CLM-1", 'Smith, Bob "BS"', "Travel", "2024-11-12", "12.5", "Submitted"]


def test_claims_export(collections: EntityCollections) -> None:
    text = export_claims_csv(collections.claims)
    assert text.split("\n") == [
        "ID,Employee,Category,Date,Amount,Status",
        "CLM-1,Bob Smith,Travel,2024-11-12,1500,Submitted",
        "CLM-2,Alex Doe,Travel,2024-11-10,45,Approved",
    ]
