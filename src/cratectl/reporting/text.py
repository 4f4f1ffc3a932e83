from __future__ import annotations

import shlex
from typing import TextIO

from ..engine.orchestrator import RunResult, RunSummary
from ..modules.locator import Module
from ..modules.params import ParamSet


class TextReporter:
    """Human-readable progress on stdout, one line per module visited."""

    def __init__(self, tool: str, stream: TextIO, show_params: bool, verbose: bool = False) -> None:
        self.tool = tool
        self.stream = stream
        self.show_params = show_params
        self.verbose = verbose

    def _line(self, text: str) -> None:
        print(text, file=self.stream, flush=True)

    def module_started(self, module: Module) -> None:
        self._line(module.rel_path)

    def params_started(self, module: Module, params: ParamSet) -> None:
        if self.show_params:
            self._line(f"  params '{params.label}'...")

    def outcome(self, result: RunResult) -> None:
        for path in result.outcome.paths:
            self._line(f"  M {path}")
        # tool output is only echoed when no file was named, or with --verbose
        if result.outcome.failed and (self.verbose or not result.outcome.paths):
            for line in result.outcome.detail.splitlines():
                self._line(f"    {line}")

    def plan(self, module: Module, params: ParamSet, cmd: list[str]) -> None:
        self.params_started(module, params)
        self._line(f"    $ {shlex.join(cmd)}")

    def finished(self, summary: RunSummary) -> None:
        counts = f"{summary.failures}/{summary.total} invocations failed"
        if summary.halted_at is not None:
            self._line(f"{self.tool}: halted on {summary.halted_at.label} ({counts})")
        elif summary.failures:
            self._line(f"{self.tool}: fail ({counts})")
        else:
            self._line(f"{self.tool}: pass ({summary.total} invocations)")
