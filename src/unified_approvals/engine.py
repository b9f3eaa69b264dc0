"""Host-facing facade over the approval workflow."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime
from pathlib import Path

from unified_approvals.auth.access import AccessController
from unified_approvals.auth.acting_user import enforce_single_acting_user
from unified_approvals.auth.roles import Role
from unified_approvals.config import Settings, load_settings
from unified_approvals.domain.entities import Claim, RequestEntity, RequestKind
from unified_approvals.domain.items import Action, ApprovalItem, Tab, split_item_id
from unified_approvals.errors import ApprovalError, ItemNotFoundError
from unified_approvals.logging_utils import get_logger
from unified_approvals.policy.engine import PolicyEngine
from unified_approvals.policy.loader import load_policy
from unified_approvals.utils.formatting import CurrencyFormatter, currency_formatter
from unified_approvals.utils.time import local_now
from unified_approvals.workflow.aggregator import build_feed, project
from unified_approvals.workflow.bulk import BulkActionCoordinator, BulkResult, Selection
from unified_approvals.workflow.details import DetailView, resolve_details
from unified_approvals.workflow.export import (
    APPROVALS_EXPORT_FILENAME,
    CLAIMS_EXPORT_FILENAME,
    export_claims_csv,
    export_feed_csv,
    write_export,
)
from unified_approvals.workflow.feed_filter import FeedSummary, filter_feed, summarize
from unified_approvals.workflow.intake import ClaimDraft, Employee, submit_claim
from unified_approvals.workflow.state_machine import allowed_actions, apply_transition, transition
from unified_approvals.workflow.store import EntityCollections


class ApprovalEngine:
    """Unified approval queue over the host's five request collections.

    The host keeps ownership of ``collections``; every write goes through
    ``EntityStore.replace`` so other views only ever see whole records.
    """

    def __init__(
        self,
        collections: EntityCollections,
        role: Role,
        acting_user_id: str,
        *,
        policy: PolicyEngine | None = None,
        settings: Settings | None = None,
        formatter: CurrencyFormatter | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._settings = settings or load_settings()
        enforce_single_acting_user(
            user_id=acting_user_id,
            allow_multi_user=self._settings.access.allow_multi_user,
        )
        self._logger = get_logger(__name__)
        self._collections = collections
        self._access = AccessController(role, acting_user_id)
        self._policy = policy or PolicyEngine(load_policy(self._settings.policy.path))
        self._formatter = formatter or currency_formatter(self._settings.display.currency)
        self._clock = clock
        self._bulk = BulkActionCoordinator(self._dispatch, Selection())
        self._logger.info(
            "Approval engine ready for user %s with role %s", acting_user_id, role.name
        )

    @property
    def collections(self) -> EntityCollections:
        return self._collections

    @property
    def policy(self) -> PolicyEngine:
        return self._policy

    @property
    def selection(self) -> Selection:
        return self._bulk.selection

    # -- reading -----------------------------------------------------------

    def feed(self) -> list[ApprovalItem]:
        return build_feed(self._collections, formatter=self._formatter)

    def view(
        self,
        tab: Tab = Tab.PENDING,
        kind: RequestKind | None = None,
        query: str = "",
    ) -> list[ApprovalItem]:
        return filter_feed(self.feed(), tab, kind, query)

    def find_item(self, item_id: str) -> ApprovalItem:
        return project(self._entity_for(item_id), self._formatter)

    def details(self, item_id: str) -> DetailView:
        return resolve_details(
            self.find_item(item_id), policy=self._policy, formatter=self._formatter
        )

    def warning_for(self, item_id: str) -> str | None:
        return self._policy.warning_for_item(self.find_item(item_id))

    def can_act(self, item_id: str) -> bool:
        return self._access.can_act(self._entity_for(item_id))

    def available_actions(self, item_id: str) -> list[Action]:
        """Actions to offer for an item: none unless the user may act on it."""
        entity = self._entity_for(item_id)
        if not self._access.can_act(entity):
            return []
        return allowed_actions(entity)

    def summary(self, today: date | None = None) -> FeedSummary:
        return summarize(self.feed(), today or self._clock().date())

    # -- actions -----------------------------------------------------------

    def approve(self, item_id: str, comment: str | None = None) -> RequestEntity:
        return self._apply(item_id, Action.APPROVE, comment=comment)

    def reject(self, item_id: str, reason: str) -> RequestEntity:
        return self._apply(item_id, Action.REJECT, reason=reason)

    def pay(self, item_id: str) -> RequestEntity:
        return self._apply(item_id, Action.PAY)

    def preview_bulk(self, action: Action, item_ids: Iterable[str] | None = None) -> str:
        return self._bulk.preview(action, item_ids)

    def bulk_apply(
        self,
        action: Action,
        item_ids: Iterable[str] | None = None,
        *,
        confirmed: bool = False,
        reason: str | None = None,
    ) -> BulkResult:
        return self._bulk.bulk_apply(action, item_ids, confirmed=confirmed, reason=reason)

    def submit_claim(self, draft: ClaimDraft, employee: Employee | None = None) -> Claim:
        claim = submit_claim(draft, employee=employee, policy=self._policy, now=self._clock())
        return self._collections.claims.prepend(claim)

    # -- export ------------------------------------------------------------

    def export_csv(self, items: Iterable[ApprovalItem] | None = None) -> str:
        return export_feed_csv(self.view() if items is None else items)

    def export_claims_csv(self, claims: Iterable[Claim] | None = None) -> str:
        return export_claims_csv(self._collections.claims if claims is None else claims)

    def save_csv(
        self, directory: str | Path, items: Iterable[ApprovalItem] | None = None
    ) -> Path:
        path = write_export(self.export_csv(items), directory, APPROVALS_EXPORT_FILENAME)
        self._logger.info("Approvals exported to %s", path)
        return path

    def save_claims_csv(
        self, directory: str | Path, claims: Iterable[Claim] | None = None
    ) -> Path:
        path = write_export(self.export_claims_csv(claims), directory, CLAIMS_EXPORT_FILENAME)
        self._logger.info("Claims exported to %s", path)
        return path

    # -- internals ---------------------------------------------------------

    def _entity_for(self, item_id: str) -> RequestEntity:
        try:
            kind, original_id = split_item_id(item_id)
        except ValueError:
            raise ItemNotFoundError(item_id) from None
        entity = self._collections.find(kind, original_id)
        if entity is None:
            raise ItemNotFoundError(item_id)
        return entity

    def _dispatch(self, item_id: str, action: Action, reason: str | None) -> RequestEntity:
        return self._apply(item_id, action, reason=reason)

    def _apply(
        self,
        item_id: str,
        action: Action,
        *,
        reason: str | None = None,
        comment: str | None = None,
    ) -> RequestEntity:
        entity = self._entity_for(item_id)
        store = self._collections.store_for(entity.kind)

        def _update(current: RequestEntity) -> RequestEntity:
            self._access.authorize(current)
            result = transition(
                current,
                action,
                reason=reason,
                comment=comment,
                now=self._clock(),
                date_format=self._settings.display.date_format,
            )
            return apply_transition(current, result)

        try:
            return store.replace(entity.id, _update)
        except ApprovalError as exc:
            self._logger.warning("%s refused for %s: %s", Action(action).value, item_id, exc)
            raise
        except KeyError:
            raise ItemNotFoundError(item_id) from None
