"""Monetary threshold evaluation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from unified_approvals.domain.entities import RequestKind
from unified_approvals.domain.items import ApprovalItem
from unified_approvals.policy.models import PolicyConfig, PolicyStage, ThresholdRule

logger = logging.getLogger(__name__)


@dataclass
class PolicyDecision:
    stage: PolicyStage
    amount: float
    warnings: list[str] = field(default_factory=list)
    rules: list[str] = field(default_factory=list)

    @property
    def flagged(self) -> bool:
        return bool(self.warnings)

    @property
    def warning(self) -> str | None:
        return self.warnings[0] if self.warnings else None


class PolicyEngine:
    """Evaluates amounts against the configured threshold table.

    Warnings are informational: nothing here blocks an action or touches an
    entity.
    """

    def __init__(self, config: PolicyConfig | None = None) -> None:
        self._config = config or PolicyConfig()
        self._rules: dict[str, ThresholdRule] = {rule.name: rule for rule in self._config.rules}
        logger.debug("PolicyEngine initialized with %d rules", len(self._rules))

    @property
    def config(self) -> PolicyConfig:
        return self._config

    def rule(self, name: str) -> ThresholdRule:
        try:
            return self._rules[name]
        except KeyError:
            raise KeyError(f"Unknown policy rule '{name}'") from None

    def decide(
        self,
        amount: float | None,
        kind: RequestKind,
        stage: PolicyStage = "review",
    ) -> PolicyDecision:
        value = float(amount) if amount is not None else 0.0
        decision = PolicyDecision(stage=stage, amount=value)
        for rule in self._config.rules:
            if rule.applies_to(kind, stage) and value > rule.threshold:
                decision.warnings.append(rule.message)
                decision.rules.append(rule.name)
        return decision

    def evaluate(
        self,
        amount: float | None,
        kind: RequestKind,
        stage: PolicyStage = "review",
    ) -> str | None:
        return self.decide(amount, kind, stage).warning

    def warnings_for_item(self, item: ApprovalItem) -> list[str]:
        """Warnings shown to an approver.

        A warning stamped on the entity at submission comes first, followed by
        every review-stage rule the amount trips. Duplicates are dropped.
        """
        warnings: list[str] = []
        stored = getattr(item.details, "policy_warning", None)
        if stored:
            warnings.append(stored)
        for message in self.decide(item.amount, item.kind, "review").warnings:
            if message not in warnings:
                warnings.append(message)
        return warnings

    def warning_for_item(self, item: ApprovalItem) -> str | None:
        warnings = self.warnings_for_item(item)
        return " ".join(warnings) if warnings else None
