from __future__ import annotations

import re
from pathlib import Path

from ..core.process import CommandResult
from ..engine.halt import HaltTier
from ..modules.locator import Module
from ..modules.params import ParamSet
from .base import Checker, Mode, Outcome
from .paths import reported_files

WARN_GROUPS: tuple[str, ...] = (
    "correctness",
    "suspicious",
    "style",
    "complexity",
    "perf",
    "pedantic",
)
ALLOWED_LINTS: tuple[str, ...] = (
    "return_self_not_must_use",
    "must_use_candidate",
    "similar_names",
    "missing_errors_doc",
    "missing_panics_doc",
    "module_name_repetitions",
    "derive_partial_eq_without_eq",
    "redundant_closure_for_method_calls",
)
FIX_ARGS: tuple[str, ...] = ("--fix", "--allow-dirty", "--allow-staged")
TARGET_ARGS: tuple[str, ...] = ("-q", "--no-deps", "--tests", "--benches", "--examples")

_DIAGNOSTIC_RE = re.compile(r"^(?P<path>[^\s:][^:]*):\d+:\d+: (?:warning|error)\b")


def _lint_name(name: str) -> str:
    return name if "::" in name else f"clippy::{name}"


def lint_flags(warn: tuple[str, ...], allow: tuple[str, ...]) -> list[str]:
    flags: list[str] = []
    for name in warn:
        flags.extend(["-W", _lint_name(name)])
    for name in allow:
        flags.extend(["-A", _lint_name(name)])
    return flags


class ClippyChecker(Checker):
    name = "lint"
    opt_out_marker = "skip.lint"
    params_file = "project.lint"
    default_params = ("--all-features",)
    default_halt = HaltTier.PARAMETER

    def __init__(
        self,
        cargo: str = "cargo",
        repo_root: Path | None = None,
        warn: tuple[str, ...] = WARN_GROUPS,
        allow: tuple[str, ...] = ALLOWED_LINTS,
    ) -> None:
        super().__init__(cargo, repo_root)
        self.warn = warn
        self.allow = allow

    def command(self, params: ParamSet, mode: Mode) -> list[str]:
        extra = FIX_ARGS if mode is Mode.APPLY else ("--message-format=short",)
        return [
            self.cargo,
            "clippy",
            *TARGET_ARGS,
            *params.args,
            *extra,
            "--",
            *lint_flags(self.warn, self.allow),
        ]

    def interpret(self, module: Module, result: CommandResult, mode: Mode) -> Outcome:
        if mode is Mode.APPLY:
            return Outcome.clean() if result.code == 0 else Outcome.dirty(detail=result.combined_output)
        flagged = [m.group("path") for m in map(_DIAGNOSTIC_RE.match, result.stderr.splitlines()) if m]
        if flagged or result.code != 0:
            return Outcome.dirty(reported_files(module, flagged, self.repo_root), result.combined_output)
        return Outcome.clean()
