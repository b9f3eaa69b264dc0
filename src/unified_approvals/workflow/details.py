"""Read-only detail view for a single approval item."""

from __future__ import annotations

from dataclasses import dataclass, field

from unified_approvals.domain.entities import (
    Claim,
    Expense,
    HRLetter,
    LeaveRequest,
    PurchaseOrder,
)
from unified_approvals.domain.items import ApprovalItem
from unified_approvals.policy.engine import PolicyEngine
from unified_approvals.utils.formatting import CurrencyFormatter, currency_formatter
from unified_approvals.workflow.state_machine import status_value


@dataclass(frozen=True)
class DetailField:
    label: str
    value: str


@dataclass(frozen=True)
class DetailLine:
    label: str
    amount: str


@dataclass(frozen=True)
class DetailView:
    header: str
    requester_name: str
    avatar_url: str | None
    status: str
    fields: tuple[DetailField, ...] = ()
    line_items: tuple[DetailLine, ...] = ()
    policy_warnings: tuple[str, ...] = ()
    notes: tuple[DetailField, ...] = field(default_factory=tuple)

    @property
    def policy_warning(self) -> str | None:
        return " ".join(self.policy_warnings) if self.policy_warnings else None

    def field_value(self, label: str) -> str | None:
        for item in self.fields + self.notes:
            if item.label == label:
                return item.value
        return None


def _leave_fields(req: LeaveRequest) -> list[DetailField]:
    return [
        DetailField("Leave Type", status_value(req.type)),
        DetailField("Duration", f"{req.days} Days"),
        DetailField("Dates", f"{req.start_date} - {req.end_date}"),
        DetailField("Reason", req.reason),
    ]


def _money_fields(entity: Expense | Claim, fmt: CurrencyFormatter) -> list[DetailField]:
    fields = [
        DetailField("Amount", fmt(entity.amount)),
        DetailField("Category", status_value(entity.category)),
        DetailField("Date Incurred", entity.date),
    ]
    if entity.description:
        fields.append(DetailField("Description", entity.description))
    return fields


def _letter_fields(letter: HRLetter) -> list[DetailField]:
    return [
        DetailField("Letter Type", status_value(letter.type)),
        DetailField("Addressee", letter.addressee or "General"),
        DetailField("Purpose", letter.purpose),
    ]


def _outcome_notes(entity: object) -> list[DetailField]:
    notes = []
    for attr, label in (
        ("approval_date", "Approved On"),
        ("approver_comment", "Approver Comment"),
        ("rejection_reason", "Rejection Reason"),
        ("paid_date", "Paid On"),
        ("date_issued", "Issued On"),
    ):
        value = getattr(entity, attr, None)
        if value:
            notes.append(DetailField(label, value))
    return notes


def resolve_details(
    item: ApprovalItem,
    *,
    policy: PolicyEngine | None = None,
    formatter: CurrencyFormatter | None = None,
) -> DetailView:
    """Kind-specific fields for the detail drawer. Never mutates the entity."""
    fmt = formatter or currency_formatter()
    entity = item.details
    fields: list[DetailField] = []
    lines: list[DetailLine] = []

    if isinstance(entity, LeaveRequest):
        fields = _leave_fields(entity)
    elif isinstance(entity, (Expense, Claim)):
        fields = _money_fields(entity, fmt)
    elif isinstance(entity, PurchaseOrder):
        fields = [
            DetailField("Total Value", fmt(entity.total_amount)),
            DetailField("Vendor", entity.vendor_name),
        ]
        lines = [
            DetailLine(f"{line.quantity}x {line.description}", fmt(line.total))
            for line in entity.items
        ]
    elif isinstance(entity, HRLetter):
        fields = _letter_fields(entity)

    warnings = (policy or PolicyEngine()).warnings_for_item(item)
    return DetailView(
        header=f"Requesting approval for {item.kind.value}",
        requester_name=item.requester_name,
        avatar_url=item.avatar_url,
        status=item.status,
        fields=tuple(fields),
        line_items=tuple(lines),
        policy_warnings=tuple(warnings),
        notes=tuple(_outcome_notes(entity)),
    )
