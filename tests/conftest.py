from __future__ import annotations

import os
from datetime import datetime

import pytest

from unified_approvals.auth import acting_user
from unified_approvals.auth.roles import builtin_role
from unified_approvals.config import Settings
from unified_approvals.domain.entities import (
    Claim,
    ClaimCategory,
    ClaimStatus,
    Expense,
    ExpenseStatus,
    HRLetter,
    LeaveRequest,
    LeaveStatus,
    LeaveType,
    LetterStatus,
    LetterType,
    PurchaseItem,
    PurchaseOrder,
    PurchaseOrderStatus,
)
from unified_approvals.engine import ApprovalEngine
from unified_approvals.policy.engine import PolicyEngine
from unified_approvals.workflow.store import EntityCollections

FIXED_NOW = datetime(2026, 10, 19, 9, 30)


def pytest_sessionstart(session: pytest.Session) -> None:
    # Keep a developer's .env from changing log output during test runs.
    os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture(autouse=True)
def _reset_acting_user() -> None:
    acting_user.reset_acting_user()
    yield
    acting_user.reset_acting_user()


@pytest.fixture
def claim() -> Claim:
    return Claim(
        id="CLM-1",
        employee_id="e2",
        employee_name="Bob Smith",
        description="Conference travel",
        amount=1500,
        date="2024-11-12",
        category=ClaimCategory.TRAVEL,
        status=ClaimStatus.SUBMITTED,
    )


@pytest.fixture
def collections(claim: Claim) -> EntityCollections:
    return EntityCollections.from_records(
        expenses=[
            Expense(
                id="EXP-1",
                payee="AWS",
                description="Cloud hosting",
                amount=820.0,
                date="2024-11-08",
                category="Software",
                status=ExpenseStatus.PENDING,
            ),
        ],
        claims=[
            claim,
            Claim(
                id="CLM-2",
                employee_id="e1",
                employee_name="Alex Doe",
                description="Uber to Airport",
                amount=45.0,
                date="2024-11-10",
                category=ClaimCategory.TRAVEL,
                status=ClaimStatus.APPROVED,
            ),
        ],
        leave_requests=[
            LeaveRequest(
                id="LR-1",
                employee_id="e3",
                employee_name="James Wilson",
                type=LeaveType.ANNUAL,
                start_date="2024-12-20",
                end_date="2024-12-24",
                days=5,
                reason="Family trip",
                status=LeaveStatus.PENDING,
                applied_on="2024-11-01",
            ),
        ],
        purchase_orders=[
            PurchaseOrder(
                id="PO-9",
                vendor_id="v2",
                vendor_name="Office Depot",
                order_date="2024-11-12",
                total_amount=6200.0,
                status=PurchaseOrderStatus.DRAFT,
                items=(
                    PurchaseItem(description="Standing desk", quantity=10, unit_cost=600.0),
                    PurchaseItem(description="Desk lamp", quantity=10, unit_cost=20.0),
                ),
            ),
        ],
        letters=[
            HRLetter(
                id="LTR-1",
                employee_id="e4",
                employee_name="Linda Kim",
                type=LetterType.SALARY_CERTIFICATE,
                date_requested="2024-11-05",
                purpose="Bank loan application",
                status=LetterStatus.PENDING,
            ),
        ],
    )


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def engine(collections: EntityCollections, settings: Settings) -> ApprovalEngine:
    return ApprovalEngine(
        collections,
        builtin_role("Super Admin"),
        "e1",
        policy=PolicyEngine(),
        settings=settings,
        clock=lambda: FIXED_NOW,
    )
