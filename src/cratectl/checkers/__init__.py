"""Check tool integrations (format and lint)."""

from __future__ import annotations

from pathlib import Path

from ..config.loader import ToolConfig
from ..core.env import getenv
from .base import Checker, Mode, Outcome, OutcomeKind
from .clippy import ALLOWED_LINTS, WARN_GROUPS, ClippyChecker
from .rustfmt import RustfmtChecker

CHECKERS: dict[str, type[Checker]] = {
    RustfmtChecker.name: RustfmtChecker,
    ClippyChecker.name: ClippyChecker,
}


def resolve_cargo(config: ToolConfig) -> str:
    return getenv("CRATECTL_CARGO") or config.cargo or "cargo"


def build_checker(name: str, config: ToolConfig, repo_root: Path) -> Checker:
    cargo = resolve_cargo(config)
    if name == ClippyChecker.name:
        return ClippyChecker(
            cargo,
            repo_root,
            warn=config.warn if config.warn is not None else WARN_GROUPS,
            allow=config.allow if config.allow is not None else ALLOWED_LINTS,
        )
    return CHECKERS[name](cargo, repo_root)


__all__ = [
    "CHECKERS",
    "Checker",
    "ClippyChecker",
    "Mode",
    "Outcome",
    "OutcomeKind",
    "RustfmtChecker",
    "build_checker",
    "resolve_cargo",
]
