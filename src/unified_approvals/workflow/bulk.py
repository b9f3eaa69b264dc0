"""Multi-select state and best-effort bulk actions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from unified_approvals.domain.entities import RequestEntity
from unified_approvals.domain.items import Action, ApprovalItem
from unified_approvals.errors import ApprovalError, ConfirmationRequired

logger = logging.getLogger(__name__)

Dispatch = Callable[[str, Action, str | None], RequestEntity]


class Selection:
    """Set of selected item ids, kept in selection order."""

    def __init__(self) -> None:
        self._ids: dict[str, None] = {}

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    def toggle(self, item_id: str) -> None:
        if item_id in self._ids:
            del self._ids[item_id]
        else:
            self._ids[item_id] = None

    def toggle_all(self, visible: Sequence[ApprovalItem]) -> None:
        """Select every visible item, or clear when all of them are selected."""
        if set(self._ids) == {item.id for item in visible}:
            self.clear()
        else:
            self._ids = {item.id: None for item in visible}

    def clear(self) -> None:
        self._ids = {}


@dataclass(frozen=True)
class BulkFailure:
    item_id: str
    error: ApprovalError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class BulkResult:
    action: Action
    succeeded: list[str] = field(default_factory=list)
    failures: list[BulkFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_ids(self) -> list[str]:
        return [failure.item_id for failure in self.failures]


def confirmation_prompt(action: Action, count: int) -> str:
    return f"{Action(action).value} {count} selected items?"


class BulkActionCoordinator:
    """Applies one action across a mixed-kind selection.

    Every item is dispatched on its own: a refusal for one item is recorded
    and the rest still commit. This is a best-effort batch, not a
    transaction.
    """

    def __init__(self, dispatch: Dispatch, selection: Selection | None = None) -> None:
        self._dispatch = dispatch
        self._selection = selection if selection is not None else Selection()

    @property
    def selection(self) -> Selection:
        return self._selection

    def preview(self, action: Action, item_ids: Iterable[str] | None = None) -> str:
        ids = self._resolve_ids(item_ids)
        return confirmation_prompt(action, len(ids))

    def bulk_apply(
        self,
        action: Action,
        item_ids: Iterable[str] | None = None,
        *,
        confirmed: bool = False,
        reason: str | None = None,
    ) -> BulkResult:
        """Apply ``action`` to ``item_ids`` (default: the current selection).

        Without ``confirmed`` nothing is dispatched and ConfirmationRequired
        carries the prompt to show. Once dispatched, the selection is cleared
        whatever the outcome.
        """
        action = Action(action)
        ids = self._resolve_ids(item_ids)
        if not confirmed:
            raise ConfirmationRequired(confirmation_prompt(action, len(ids)))

        result = BulkResult(action=action)
        try:
            for item_id in ids:
                try:
                    self._dispatch(item_id, action, reason)
                except ApprovalError as exc:
                    result.failures.append(BulkFailure(item_id=item_id, error=exc))
                else:
                    result.succeeded.append(item_id)
        finally:
            self._selection.clear()

        logger.info(
            "Bulk %s: %d succeeded, %d failed",
            action.value,
            len(result.succeeded),
            len(result.failures),
        )
        for failure in result.failures:
            logger.warning("Bulk %s skipped %s: %s", action.value, failure.item_id, failure.message)
        return result

    def _resolve_ids(self, item_ids: Iterable[str] | None) -> list[str]:
        if item_ids is None:
            return list(self._selection.ids)
        # Preserve caller order, drop duplicates.
        return list(dict.fromkeys(item_ids))
