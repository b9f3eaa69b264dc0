"""Error taxonomy for approval actions.

Single dispatches raise these; the bulk coordinator collects them per item.
"""

from __future__ import annotations


class ApprovalError(Exception):
    """Base class for every refusal raised by the engine."""


class ValidationError(ApprovalError):
    """Input was rejected before any state change."""


class RejectionReasonRequired(ValidationError):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"A reason is required to reject '{item_id}'")


class InvalidTransitionError(ApprovalError):
    def __init__(self, kind: str, entity_id: str, status: str, action: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        self.status = status
        self.action = action
        super().__init__(f"Cannot {action.lower()} {kind} '{entity_id}' from status '{status}'")


class AuthorizationDenied(ApprovalError):
    def __init__(self, entity_id: str, reason: str) -> None:
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"Not permitted to act on '{entity_id}': {reason}")


class ConfirmationRequired(ApprovalError):
    """Raised when a bulk action is dispatched without explicit confirmation."""

    def __init__(self, prompt: str) -> None:
        self.prompt = prompt
        super().__init__(prompt)


class ItemNotFoundError(ApprovalError, KeyError):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"No approval item with id '{item_id}'")

    def __str__(self) -> str:
        return str(self.args[0])


class ActingUserViolationError(RuntimeError):
    """Raised when a second acting user is bound in single-user mode."""
