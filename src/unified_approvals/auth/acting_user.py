"""Process-local guard for the single acting user."""

from __future__ import annotations

import threading

from unified_approvals.errors import ActingUserViolationError


class _SingleActingUserGuard:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active_user: str | None = None

    @property
    def active_user(self) -> str | None:
        return self._active_user

    def enforce(self, user_id: str, allow_multi_user: bool) -> None:
        if allow_multi_user:
            return

        with self._lock:
            if self._active_user is None:
                self._active_user = user_id
                return
            if self._active_user != user_id:
                raise ActingUserViolationError(
                    "Only one acting user is allowed per process. "
                    "Set APPROVALS_ALLOW_MULTI_USER=true to allow this mode."
                )

    def reset(self) -> None:
        with self._lock:
            self._active_user = None


_guard = _SingleActingUserGuard()


def enforce_single_acting_user(*, user_id: str, allow_multi_user: bool) -> None:
    _guard.enforce(user_id, allow_multi_user)


def reset_acting_user() -> None:
    """Release the bound acting user, e.g. on sign-out."""
    _guard.reset()
