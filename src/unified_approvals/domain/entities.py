"""Request entities owned by the host.

Every record is a frozen dataclass: a status change produces a new record via
``dataclasses.replace``, never an in-place field edit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class RequestKind(str, Enum):
    EXPENSE = "Expense"
    CLAIM = "Claim"
    LEAVE = "Leave"
    PURCHASE_ORDER = "Purchase Order"
    HR_LETTER = "HR Letter"


class ClaimStatus(str, Enum):
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    PAID = "Paid"


class ExpenseStatus(str, Enum):
    PENDING = "Pending"
    SCHEDULED = "Scheduled"
    FAILED = "Failed"
    PAID = "Paid"


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PurchaseOrderStatus(str, Enum):
    DRAFT = "Draft"
    ORDERED = "Ordered"
    RECEIVED = "Received"
    CANCELLED = "Cancelled"


class LetterStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ClaimCategory(str, Enum):
    TRAVEL = "Travel"
    MEALS = "Meals"
    OFFICE_SUPPLIES = "Office Supplies"
    SOFTWARE = "Software"
    TRAINING = "Training"
    OTHER = "Other"


class LeaveType(str, Enum):
    ANNUAL = "Annual"
    SICK = "Sick"
    PERSONAL = "Personal"
    MATERNITY = "Maternity"
    UNPAID = "Unpaid"


class LetterType(str, Enum):
    EMPLOYMENT_VERIFICATION = "Employment Verification"
    SALARY_CERTIFICATE = "Salary Certificate"
    NOC = "NOC"
    EXPERIENCE_LETTER = "Experience Letter"
    CONFIRMATION_LETTER = "Confirmation Letter"


# Kinds without a per-employee requester are attributed to a department.
EXPENSE_REQUESTER = "Finance Dept"
EXPENSE_AVATAR = "https://ui-avatars.com/api/?name=Finance&background=random"
PURCHASE_REQUESTER = "Procurement"


@dataclass(frozen=True)
class Claim:
    id: str
    employee_id: str
    employee_name: str
    description: str
    amount: float | None
    date: str
    category: ClaimCategory
    status: ClaimStatus = ClaimStatus.SUBMITTED
    avatar_url: str | None = None
    notes: str | None = None
    receipt_url: str | None = None
    policy_warning: str | None = None
    submission_date: str | None = None
    approval_date: str | None = None
    approver_comment: str | None = None
    rejection_reason: str | None = None
    paid_date: str | None = None

    kind = RequestKind.CLAIM

    @property
    def requester_id(self) -> str | None:
        return self.employee_id


@dataclass(frozen=True)
class Expense:
    id: str
    payee: str
    description: str
    amount: float | None
    date: str
    category: str
    status: ExpenseStatus = ExpenseStatus.PENDING
    method: str = "Bank Transfer"
    account_id: str | None = None
    project_id: str | None = None
    reference: str | None = None
    gl_account_id: str | None = None
    rejection_reason: str | None = None

    kind = RequestKind.EXPENSE

    @property
    def requester_id(self) -> str | None:
        return None


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    employee_id: str
    employee_name: str
    type: LeaveType
    start_date: str
    end_date: str
    days: int
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING
    avatar_url: str | None = None
    applied_on: str | None = None
    approval_date: str | None = None
    rejection_reason: str | None = None

    kind = RequestKind.LEAVE

    @property
    def requester_id(self) -> str | None:
        return self.employee_id


@dataclass(frozen=True)
class PurchaseItem:
    description: str
    quantity: int
    unit_cost: float

    @property
    def total(self) -> float:
        return self.quantity * self.unit_cost


@dataclass(frozen=True)
class PurchaseOrder:
    id: str
    vendor_id: str
    vendor_name: str
    order_date: str
    total_amount: float | None
    status: PurchaseOrderStatus = PurchaseOrderStatus.DRAFT
    items: tuple[PurchaseItem, ...] = field(default_factory=tuple)
    expected_date: str | None = None
    notes: str | None = None
    rejection_reason: str | None = None

    kind = RequestKind.PURCHASE_ORDER

    @property
    def requester_id(self) -> str | None:
        return None


@dataclass(frozen=True)
class HRLetter:
    id: str
    employee_id: str
    employee_name: str
    type: LetterType
    date_requested: str
    purpose: str
    status: LetterStatus = LetterStatus.PENDING
    avatar_url: str | None = None
    addressee: str | None = None
    date_issued: str | None = None
    approval_date: str | None = None
    rejection_reason: str | None = None

    kind = RequestKind.HR_LETTER

    @property
    def requester_id(self) -> str | None:
        return self.employee_id


RequestEntity = Union[Claim, Expense, LeaveRequest, PurchaseOrder, HRLetter]
