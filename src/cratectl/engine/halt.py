"""Halt granularity and the early-abort decision.

Tiers are ordered `none < module < parameter`; a higher tier aborts more
eagerly. The decision is taken after every invocation against the
`parameter` threshold and after every completed module against the `module`
threshold.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_USAGE


class HaltTier(IntEnum):
    NONE = 0
    MODULE = 1
    PARAMETER = 2

    @property
    def label(self) -> str:
        return self.name.lower()


HALT_CHOICES: tuple[str, ...] = ("none", "module", "parameter")
HALT_ALIASES: dict[str, HaltTier] = {
    "none": HaltTier.NONE,
    "module": HaltTier.MODULE,
    "crate": HaltTier.MODULE,
    "parameter": HaltTier.PARAMETER,
    "params": HaltTier.PARAMETER,
}


def parse_halt_tier(raw: str) -> HaltTier:
    tier = HALT_ALIASES.get(raw.strip().lower())
    if tier is None:
        raise ScriptError(f"unknown halt mode: {raw} (expected one of: {', '.join(HALT_CHOICES)})", ERR_USAGE, kind="usage")
    return tier


@dataclass
class HaltPolicy:
    tier: HaltTier
    failures: int = 0

    def record(self, failed: bool) -> None:
        if failed:
            self.failures += 1

    def should_halt(self, level: HaltTier) -> bool:
        if level is HaltTier.NONE:
            return False
        return self.failures > 0 and self.tier >= level
