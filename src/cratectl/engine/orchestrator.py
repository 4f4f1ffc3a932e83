from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from ..checkers.base import Checker, Mode, Outcome, OutcomeKind
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_TOOL
from ..core.logging import log_event
from ..modules.locator import Module
from ..modules.params import ParamSet, read_param_sets
from .halt import HaltPolicy, HaltTier


@dataclass(frozen=True)
class RunResult:
    module: Module
    params: ParamSet
    outcome: Outcome
    duration_ms: int

    @property
    def status(self) -> str:
        return "fail" if self.outcome.failed else "pass"


@dataclass
class RunSummary:
    modules: list[Module] = field(default_factory=list)
    results: list[RunResult] = field(default_factory=list)
    failures: int = 0
    halted_at: HaltTier | None = None

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def halted(self) -> bool:
        return self.halted_at is not None

    @property
    def status(self) -> str:
        if self.halted:
            return "halted"
        return "fail" if self.failures else "pass"

    def results_for(self, module: Module) -> list[RunResult]:
        return [row for row in self.results if row.module == module]


class Reporter(Protocol):
    def module_started(self, module: Module) -> None: ...

    def params_started(self, module: Module, params: ParamSet) -> None: ...

    def outcome(self, result: RunResult) -> None: ...


class NullReporter:
    def module_started(self, module: Module) -> None:
        return None

    def params_started(self, module: Module, params: ParamSet) -> None:
        return None

    def outcome(self, result: RunResult) -> None:
        return None


class Orchestrator:
    """Drive one checker over modules and their parameter sets.

    The failure counter lives in `policy`; nothing else is shared between
    invocations. Execution is sequential and an in-flight command is never
    cancelled, the orchestrator only declines to start the next one.
    """

    def __init__(
        self,
        checker: Checker,
        mode: Mode,
        policy: HaltPolicy,
        reporter: Reporter | None = None,
        ctx: RunContext | None = None,
        default_params: tuple[str, ...] | None = None,
    ) -> None:
        self.checker = checker
        self.mode = mode
        self.policy = policy
        self.reporter = reporter or NullReporter()
        self.ctx = ctx
        self.default_params = checker.default_params if default_params is None else default_params

    def param_sets(self, module: Module) -> list[ParamSet]:
        return read_param_sets(module.path, self.checker.params_file, self.default_params)

    def plan(self, modules: Iterable[Module]) -> list[tuple[Module, list[ParamSet]]]:
        return [(module, self.param_sets(module)) for module in modules]

    def run(self, modules: Iterable[Module]) -> RunSummary:
        summary = RunSummary()
        for module in modules:
            summary.modules.append(module)
            self.reporter.module_started(module)
            for params in self.param_sets(module):
                self.reporter.params_started(module, params)
                summary.results.append(self._invoke(module, params))
                summary.failures = self.policy.failures
                if self.policy.should_halt(HaltTier.PARAMETER):
                    return self._halt(summary, HaltTier.PARAMETER)
            if self.policy.should_halt(HaltTier.MODULE):
                return self._halt(summary, HaltTier.MODULE)
        return summary

    def _invoke(self, module: Module, params: ParamSet) -> RunResult:
        started = time.perf_counter()
        outcome = self.checker.run(module, params, self.mode)
        duration_ms = int((time.perf_counter() - started) * 1000)
        if outcome.kind is OutcomeKind.EXECUTION_ERROR:
            raise ScriptError(outcome.detail, ERR_TOOL, kind="tool_unavailable")
        self.policy.record(outcome.failed)
        result = RunResult(module=module, params=params, outcome=outcome, duration_ms=duration_ms)
        if self.ctx is not None:
            log_event(
                self.ctx,
                "debug",
                self.checker.name,
                "invoke",
                module=module.rel_path,
                params=params.label or "-",
                status=result.status,
                files=len(outcome.paths),
                duration_ms=duration_ms,
            )
        self.reporter.outcome(result)
        return result

    def _halt(self, summary: RunSummary, level: HaltTier) -> RunSummary:
        summary.halted_at = level
        if self.ctx is not None:
            log_event(
                self.ctx,
                "warn",
                self.checker.name,
                "halt",
                halted_at=level.label,
                halt_on=self.policy.tier.label,
                failures=self.policy.failures,
            )
        return summary
