"""CSV export of the filtered feed.

Column order and the header row are a compatibility contract with existing
consumers of these files.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from pathlib import Path

from unified_approvals.domain.entities import Claim
from unified_approvals.domain.items import ApprovalItem
from unified_approvals.utils.formatting import format_amount
from unified_approvals.workflow.state_machine import status_value

FEED_COLUMNS = ("ID", "Requester", "Category", "Date", "Amount", "Status")
CLAIM_COLUMNS = ("ID", "Employee", "Category", "Date", "Amount", "Status")

CLAIMS_EXPORT_FILENAME = "claims_export.csv"
APPROVALS_EXPORT_FILENAME = "approvals_export.csv"


def _write_rows(header: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    # Existing consumers expect no newline after the last row.
    return buffer.getvalue().removesuffix("\n")


def write_export(text: str, directory: str | Path, filename: str) -> Path:
    """Write an export under ``directory``, creating it if needed."""
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / filename
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)
    return path


def export_feed_csv(items: Iterable[ApprovalItem]) -> str:
    rows = (
        (
            item.original_id,
            item.requester_name,
            item.kind.value,
            item.date,
            format_amount(item.amount),
            item.status,
        )
        for item in items
    )
    return _write_rows(FEED_COLUMNS, rows)


def export_claims_csv(claims: Iterable[Claim]) -> str:
    rows = (
        (
            claim.id,
            claim.employee_name,
            status_value(claim.category),
            claim.date,
            format_amount(claim.amount),
            status_value(claim.status),
        )
        for claim in claims
    )
    return _write_rows(CLAIM_COLUMNS, rows)
