"""Policy configuration models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from unified_approvals.domain.entities import RequestKind

PolicyStage = Literal["submission", "review"]


def _ensure_list(v: Any) -> list:
    """Convert None to empty list, pass through lists."""
    if v is None:
        return []
    return v


class ThresholdRule(BaseModel):
    name: str
    stage: PolicyStage
    threshold: float = Field(ge=0)
    message: str = Field(min_length=1)
    kinds: list[RequestKind] = Field(
        default_factory=list,
        description="Kinds the rule applies to; empty means every kind.",
    )

    @field_validator("kinds", mode="before")
    @classmethod
    def _validate_kinds(cls, v: Any) -> list:
        return _ensure_list(v)

    def applies_to(self, kind: RequestKind, stage: PolicyStage) -> bool:
        if self.stage != stage:
            return False
        return not self.kinds or kind in self.kinds


def _default_rules() -> list[ThresholdRule]:
    return [
        ThresholdRule(
            name="claim_submission",
            stage="submission",
            threshold=1000,
            message="Requires Director Approval",
            kinds=[RequestKind.CLAIM],
        ),
        ThresholdRule(
            name="review_escalation",
            stage="review",
            threshold=5000,
            message="High value transaction requires VP approval.",
        ),
    ]


class PolicyConfig(BaseModel):
    version: int = Field(default=1)
    rules: list[ThresholdRule] = Field(default_factory=_default_rules)

    @field_validator("rules", mode="before")
    @classmethod
    def _validate_rules(cls, v: Any) -> list:
        if v is None:
            return _default_rules()
        return v

    @field_validator("rules")
    @classmethod
    def _unique_names(cls, v: list[ThresholdRule]) -> list[ThresholdRule]:
        seen: set[str] = set()
        for rule in v:
            if rule.name in seen:
                raise ValueError(f"Duplicate policy rule name '{rule.name}'")
            seen.add(rule.name)
        return v

    @classmethod
    def from_yaml(cls, data: dict[str, object]) -> "PolicyConfig":
        return cls.model_validate(data)
