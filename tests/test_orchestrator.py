from __future__ import annotations

from pathlib import Path

import pytest
from helpers import make_crate

from cratectl.checkers.base import Checker, Mode, Outcome
from cratectl.core.context import RunContext
from cratectl.core.errors import ScriptError
from cratectl.core.exit_codes import ERR_TOOL
from cratectl.core.process import CommandResult
from cratectl.engine.halt import HaltPolicy, HaltTier
from cratectl.engine.orchestrator import Orchestrator, RunResult, RunSummary
from cratectl.modules.locator import Module, find_modules
from cratectl.modules.params import ParamSet


class ScriptedChecker(Checker):
    name = "lint"
    opt_out_marker = "skip.lint"
    params_file = "project.lint"
    default_params = ("--all-features",)
    default_halt = HaltTier.PARAMETER

    def __init__(self, repo_root: Path, failing: set[tuple[str, str]] | None = None, broken: bool = False) -> None:
        super().__init__("cargo", repo_root)
        self.failing = failing or set()
        self.broken = broken
        self.calls: list[tuple[str, str]] = []

    def command(self, params: ParamSet, mode: Mode) -> list[str]:
        return [self.cargo, "clippy", *params.args]

    def interpret(self, module: Module, result: CommandResult, mode: Mode) -> Outcome:
        raise NotImplementedError

    def run(self, module: Module, params: ParamSet, mode: Mode) -> Outcome:
        self.calls.append((module.rel_path, params.label))
        if self.broken:
            return Outcome.execution_error("unable to execute `cargo`: No such file or directory")
        if (module.rel_path, params.label) in self.failing:
            return Outcome.dirty((f"{module.rel_path}/src/lib.rs",))
        return Outcome.clean()


class RecordingReporter:
    def __init__(self) -> None:
        self.events: list[str] = []

    def module_started(self, module: Module) -> None:
        self.events.append(f"module {module.rel_path}")

    def params_started(self, module: Module, params: ParamSet) -> None:
        self.events.append(f"params {params.label}")

    def outcome(self, result: RunResult) -> None:
        self.events.append(f"{result.status} {result.params.label}")


def _three_modules(root: Path) -> list[Module]:
    for rel in ("m1", "m2", "m3"):
        make_crate(root, rel, params="--a\n--b\n")
    return find_modules(root, "skip.lint", repo_root=root)


def _run(root: Path, tier: HaltTier, failing: set[tuple[str, str]]) -> tuple[ScriptedChecker, RunSummary]:
    checker = ScriptedChecker(root, failing)
    summary = Orchestrator(checker, Mode.CHECK, HaltPolicy(tier)).run(_three_modules(root))
    return checker, summary


def test_parameter_tier_stops_after_first_failed_invocation(workspace: Path) -> None:
    checker, summary = _run(workspace, HaltTier.PARAMETER, {("m2", "--a")})
    assert checker.calls == [("m1", "--a"), ("m1", "--b"), ("m2", "--a")]
    assert summary.failures == 1
    assert summary.halted_at is HaltTier.PARAMETER
    assert summary.status == "halted"


def test_module_tier_finishes_current_module(workspace: Path) -> None:
    checker, summary = _run(workspace, HaltTier.MODULE, {("m2", "--a")})
    assert checker.calls == [("m1", "--a"), ("m1", "--b"), ("m2", "--a"), ("m2", "--b")]
    assert summary.failures == 1
    assert summary.halted_at is HaltTier.MODULE


def test_none_tier_runs_everything(workspace: Path) -> None:
    checker, summary = _run(workspace, HaltTier.NONE, {("m2", "--a"), ("m3", "--b")})
    assert len(checker.calls) == 6
    assert summary.failures == 2
    assert summary.total == 6
    assert not summary.halted
    assert summary.status == "fail"


def test_clean_run_passes(workspace: Path) -> None:
    checker, summary = _run(workspace, HaltTier.PARAMETER, set())
    assert len(checker.calls) == 6
    assert summary.failures == 0
    assert summary.status == "pass"


def test_failure_in_last_module_halts_without_skipping(workspace: Path) -> None:
    checker, summary = _run(workspace, HaltTier.MODULE, {("m3", "--b")})
    assert len(checker.calls) == 6
    assert summary.halted_at is HaltTier.MODULE


def test_module_with_empty_param_file_is_noop(workspace: Path) -> None:
    make_crate(workspace, "empty", params="# disabled\n")
    make_crate(workspace, "full")
    checker = ScriptedChecker(workspace)
    reporter = RecordingReporter()
    modules = find_modules(workspace, "skip.lint", repo_root=workspace)
    summary = Orchestrator(checker, Mode.CHECK, HaltPolicy(HaltTier.PARAMETER), reporter=reporter).run(modules)
    assert checker.calls == [("full", "--all-features")]
    assert summary.total == 1
    assert [m.rel_path for m in summary.modules] == ["empty", "full"]
    assert reporter.events == ["module empty", "module full", "params --all-features", "pass --all-features"]


def test_default_params_override(workspace: Path) -> None:
    make_crate(workspace, "one")
    checker = ScriptedChecker(workspace)
    modules = find_modules(workspace, "skip.lint", repo_root=workspace)
    Orchestrator(checker, Mode.CHECK, HaltPolicy(HaltTier.NONE), default_params=("--workspace",)).run(modules)
    assert checker.calls == [("one", "--workspace")]


def test_results_grouped_by_module(workspace: Path) -> None:
    _, summary = _run(workspace, HaltTier.NONE, {("m1", "--b")})
    m1 = summary.modules[0]
    rows = summary.results_for(m1)
    assert [(row.params.label, row.status) for row in rows] == [("--a", "pass"), ("--b", "fail")]
    assert rows[1].outcome.paths == ("m1/src/lib.rs",)


def test_execution_error_is_fatal_regardless_of_tier(workspace: Path) -> None:
    checker = ScriptedChecker(workspace, broken=True)
    orchestrator = Orchestrator(checker, Mode.APPLY, HaltPolicy(HaltTier.NONE))
    with pytest.raises(ScriptError) as err:
        orchestrator.run(_three_modules(workspace))
    assert err.value.code == ERR_TOOL
    assert checker.calls == [("m1", "--a")]


def test_plan_lists_param_sets_without_running(workspace: Path) -> None:
    checker = ScriptedChecker(workspace)
    plan = Orchestrator(checker, Mode.CHECK, HaltPolicy(HaltTier.NONE)).plan(_three_modules(workspace))
    assert [(m.rel_path, [p.label for p in sets]) for m, sets in plan] == [
        ("m1", ["--a", "--b"]),
        ("m2", ["--a", "--b"]),
        ("m3", ["--a", "--b"]),
    ]
    assert checker.calls == []


def test_halt_is_logged_with_run_context(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ctx = RunContext.from_args("halt-run", workspace, root=str(workspace))
    checker = ScriptedChecker(workspace, {("m1", "--b")})
    summary = Orchestrator(checker, Mode.CHECK, HaltPolicy(HaltTier.PARAMETER), ctx=ctx).run(_three_modules(workspace))
    assert summary.failures == 1
    assert summary.halted_at is HaltTier.PARAMETER
    err = capsys.readouterr().err
    assert "level=warn run_id=halt-run component=lint action=halt" in err
    assert "halted_at=parameter" in err
