"""Projection of the five host collections into one approval feed."""

from __future__ import annotations

from datetime import date

from unified_approvals.domain.entities import (
    EXPENSE_AVATAR,
    EXPENSE_REQUESTER,
    PURCHASE_REQUESTER,
    Claim,
    Expense,
    HRLetter,
    LeaveRequest,
    PurchaseOrder,
    RequestEntity,
    RequestKind,
)
from unified_approvals.domain.items import ApprovalItem, make_item_id
from unified_approvals.utils.formatting import CurrencyFormatter, currency_formatter
from unified_approvals.utils.time import parse_display_date
from unified_approvals.workflow.state_machine import status_value
from unified_approvals.workflow.store import EntityCollections


def _expense_item(exp: Expense, fmt: CurrencyFormatter) -> ApprovalItem:
    return ApprovalItem(
        id=make_item_id(RequestKind.EXPENSE, exp.id),
        kind=RequestKind.EXPENSE,
        requester_name=EXPENSE_REQUESTER,
        avatar_url=EXPENSE_AVATAR,
        title=exp.payee,
        subtitle=fmt(exp.amount),
        date=exp.date,
        status=status_value(exp.status),
        original_id=exp.id,
        amount=exp.amount,
        details=exp,
    )


def _claim_item(claim: Claim, fmt: CurrencyFormatter) -> ApprovalItem:
    return ApprovalItem(
        id=make_item_id(RequestKind.CLAIM, claim.id),
        kind=RequestKind.CLAIM,
        requester_name=claim.employee_name,
        requester_id=claim.employee_id,
        avatar_url=claim.avatar_url,
        title=claim.description,
        subtitle=fmt(claim.amount),
        date=claim.date,
        status=status_value(claim.status),
        original_id=claim.id,
        amount=claim.amount,
        details=claim,
    )


def _leave_item(req: LeaveRequest, fmt: CurrencyFormatter) -> ApprovalItem:
    return ApprovalItem(
        id=make_item_id(RequestKind.LEAVE, req.id),
        kind=RequestKind.LEAVE,
        requester_name=req.employee_name,
        requester_id=req.employee_id,
        avatar_url=req.avatar_url,
        title=f"{status_value(req.type)} Leave",
        subtitle=f"{req.days} Days ({req.start_date})",
        date=req.applied_on or req.start_date,
        status=status_value(req.status),
        original_id=req.id,
        details=req,
    )


def _purchase_item(po: PurchaseOrder, fmt: CurrencyFormatter) -> ApprovalItem:
    return ApprovalItem(
        id=make_item_id(RequestKind.PURCHASE_ORDER, po.id),
        kind=RequestKind.PURCHASE_ORDER,
        requester_name=PURCHASE_REQUESTER,
        title=po.vendor_name,
        subtitle=fmt(po.total_amount),
        date=po.order_date,
        status=status_value(po.status),
        original_id=po.id,
        amount=po.total_amount,
        details=po,
    )


def _letter_item(letter: HRLetter, fmt: CurrencyFormatter) -> ApprovalItem:
    return ApprovalItem(
        id=make_item_id(RequestKind.HR_LETTER, letter.id),
        kind=RequestKind.HR_LETTER,
        requester_name=letter.employee_name,
        requester_id=letter.employee_id,
        avatar_url=letter.avatar_url,
        title=status_value(letter.type),
        subtitle=letter.purpose,
        date=letter.date_requested,
        status=status_value(letter.status),
        original_id=letter.id,
        details=letter,
    )


_PROJECTIONS = {
    RequestKind.EXPENSE: _expense_item,
    RequestKind.CLAIM: _claim_item,
    RequestKind.LEAVE: _leave_item,
    RequestKind.PURCHASE_ORDER: _purchase_item,
    RequestKind.HR_LETTER: _letter_item,
}


def project(entity: RequestEntity, formatter: CurrencyFormatter | None = None) -> ApprovalItem:
    """Project a single entity into its ApprovalItem."""
    return _PROJECTIONS[entity.kind](entity, formatter or currency_formatter())


def _sort_key(item: ApprovalItem) -> int:
    parsed = parse_display_date(item.date)
    # Unparseable dates sort after every real date in a descending feed.
    return parsed.toordinal() if parsed is not None else date.min.toordinal() - 1


def build_feed(
    collections: EntityCollections,
    *,
    formatter: CurrencyFormatter | None = None,
) -> list[ApprovalItem]:
    """Merge every collection into one feed, newest first.

    Equal dates keep insertion order: expenses, claims, leave requests,
    purchase orders, then letters, each in collection order.
    """
    fmt = formatter or currency_formatter()
    items: list[ApprovalItem] = []
    items.extend(_expense_item(exp, fmt) for exp in collections.expenses)
    items.extend(_claim_item(claim, fmt) for claim in collections.claims)
    items.extend(_leave_item(req, fmt) for req in collections.leave_requests)
    items.extend(_purchase_item(po, fmt) for po in collections.purchase_orders)
    items.extend(_letter_item(letter, fmt) for letter in collections.letters)
    return sorted(items, key=_sort_key, reverse=True)
