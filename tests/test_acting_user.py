from __future__ import annotations

import pytest

from unified_approvals.auth import acting_user
from unified_approvals.auth.acting_user import enforce_single_acting_user, reset_acting_user
from unified_approvals.auth.roles import builtin_role
from unified_approvals.config import AccessSettings, Settings
from unified_approvals.engine import ApprovalEngine
from unified_approvals.errors import ActingUserViolationError
from unified_approvals.policy.engine import PolicyEngine
from unified_approvals.workflow.store import EntityCollections


def test_first_acting_user_is_bound() -> None:
    enforce_single_acting_user(user_id="e1", allow_multi_user=False)
    assert acting_user._guard.active_user == "e1"
    enforce_single_acting_user(user_id="e1", allow_multi_user=False)


def test_second_acting_user_is_refused() -> None:
    enforce_single_acting_user(user_id="e1", allow_multi_user=False)
    with pytest.raises(ActingUserViolationError, match="APPROVALS_ALLOW_MULTI_USER"):
        enforce_single_acting_user(user_id="e2", allow_multi_user=False)


def test_multi_user_flag_skips_the_guard() -> None:
    enforce_single_acting_user(user_id="e1", allow_multi_user=False)
    enforce_single_acting_user(user_id="e2", allow_multi_user=True)
    assert acting_user._guard.active_user == "e1"


def test_reset_releases_the_bound_user() -> None:
    enforce_single_acting_user(user_id="e1", allow_multi_user=False)
    reset_acting_user()
    enforce_single_acting_user(user_id="e2", allow_multi_user=False)
    assert acting_user._guard.active_user == "e2"


def test_engine_enforces_guard(collections: EntityCollections, settings: Settings) -> None:
    admin = builtin_role("Super Admin")
    ApprovalEngine(collections, admin, "e1", policy=PolicyEngine(), settings=settings)
    with pytest.raises(ActingUserViolationError):
        ApprovalEngine(collections, admin, "e2", policy=PolicyEngine(), settings=settings)

    relaxed = Settings(access=AccessSettings(allow_multi_user=True))
    ApprovalEngine(collections, admin, "e2", policy=PolicyEngine(), settings=relaxed)
