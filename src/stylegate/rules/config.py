# SPDX-License-Identifier: MIT
"""Run configuration — gate profiles, rule set location, scanned extensions."""

from __future__ import annotations

import os
from dataclasses import dataclass

from stylegate.rules.base import RuleSeverity


@dataclass(frozen=True)
class ProfileConfig:
    """Configuration for a gate profile — controls the failing severity threshold."""

    name: str
    fail_on: RuleSeverity


PROFILES: dict[str, ProfileConfig] = {
    "default": ProfileConfig(name="default", fail_on=RuleSeverity.MANDATORY),
    "strict": ProfileConfig(name="strict", fail_on=RuleSeverity.CONSIDER),
    "pedantic": ProfileConfig(name="pedantic", fail_on=RuleSeverity.EXCEPTION),
}

DEFAULT_EXTENSIONS: tuple[str, ...] = (".h", ".hh", ".hpp", ".hxx", ".c", ".cc", ".cpp", ".cxx")


def load_profile(cli_profile: str | None = None) -> ProfileConfig:
    """Load profile config with CLI > env > default priority.

    Args:
        cli_profile: Profile name from CLI --profile flag (highest priority).

    Raises:
        ValueError: If the profile name is not recognized.
    """
    name = cli_profile or os.environ.get("STYLEGATE_PROFILE", "default")
    if name not in PROFILES:
        msg = f"Unknown profile: {name!r}. Valid profiles: {sorted(PROFILES.keys())}"
        raise ValueError(msg)
    return PROFILES[name]


def resolve_rules_path(cli_rules: str | None = None) -> str | None:
    """Rule set file with CLI > env priority; None selects the built-in rule set."""
    return cli_rules or os.environ.get("STYLEGATE_RULES") or None


def parse_extensions(value: str | None) -> tuple[str, ...]:
    """Parse a comma-separated extension list ("h,.cpp") into dotted suffixes."""
    if not value:
        return DEFAULT_EXTENSIONS
    exts = []
    for part in value.split(","):
        part = part.strip().lower()
        if part:
            exts.append(part if part.startswith(".") else f".{part}")
    return tuple(exts) or DEFAULT_EXTENSIONS
