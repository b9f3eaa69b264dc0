"""Load the approvals threshold table from YAML."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from unified_approvals.policy.models import PolicyConfig

logger = logging.getLogger(__name__)


def load_policy(path: str | Path) -> PolicyConfig:
    """Read and validate an approvals policy file.

    An empty file yields the built-in threshold rules. Raises
    FileNotFoundError when the file is missing and ValueError when the
    document is not a mapping.
    """
    policy_path = Path(path)
    if not policy_path.exists():
        raise FileNotFoundError(f"Approvals policy file not found: {policy_path}")
    with policy_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Approvals policy {policy_path} must be a mapping, got {type(data).__name__}"
        )
    config = PolicyConfig.from_yaml(data)
    logger.debug(
        "Loaded approvals policy %s (version %d, rules: %s)",
        policy_path,
        config.version,
        ", ".join(rule.name for rule in config.rules) or "none",
    )
    return config
