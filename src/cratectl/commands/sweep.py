"""`fmt` and `lint`: run one check tool over every crate below a path."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..checkers import CHECKERS, build_checker
from ..checkers.base import Checker, Mode
from ..config.loader import CONFIG_FILE, ToolConfig, load_tool_config
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.env import getenv
from ..core.exit_codes import ERR_CONFIG, OK, failure_exit_code
from ..core.logging import log_event
from ..core.repo_root import rel_to_root
from ..core.serialize import dumps_json
from ..engine.halt import HALT_CHOICES, HaltPolicy, HaltTier, parse_halt_tier
from ..engine.orchestrator import Orchestrator
from ..modules.locator import Module, find_modules, single_module
from ..reporting.report import build_run_report, write_report
from ..reporting.text import TextReporter

TOOL_HELP = {
    "fmt": "format crates, or check that they are formatted",
    "lint": "run clippy over crates and try to fix issues",
}


def _halt_arg(raw: str) -> str:
    try:
        return parse_halt_tier(raw).label
    except ScriptError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def add_sweep_arguments(p: argparse.ArgumentParser, tool: str) -> None:
    default_tier = CHECKERS[tool].default_halt.label
    p.add_argument(
        "path",
        nargs="?",
        default=".",
        help="directory where crate lookup starts (default: current directory)",
    )
    p.add_argument(
        "--check-only",
        "--check",
        dest="check_only",
        action="store_true",
        help="report what would change without modifying files",
    )
    p.add_argument(
        "--halt-on",
        type=_halt_arg,
        default=None,
        metavar="{" + "|".join(HALT_CHOICES) + "}",
        help=f"stop after the first failure at this granularity (default: {default_tier})",
    )
    p.add_argument(
        "--single-module",
        "--here",
        dest="single_module",
        action="store_true",
        help="check only the given directory, without crate lookup; fails if it is not a crate",
    )
    p.add_argument("--dry-run", action="store_true", help="list crates and commands without running them")
    p.add_argument("--report-file", help="write the JSON run report to this path")
    p.set_defaults(tool=tool)


def configure_sweep_parsers(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    for tool in sorted(CHECKERS):
        p = sub.add_parser(tool, help=TOOL_HELP[tool], description=TOOL_HELP[tool])
        add_sweep_arguments(p, tool)


def _configured_tier(raw: str, source: str) -> HaltTier:
    try:
        return parse_halt_tier(raw)
    except ScriptError as exc:
        raise ScriptError(f"{source}: {exc}", ERR_CONFIG, kind="config") from None


def resolve_halt_tier(cli_value: str | None, config: ToolConfig, checker: Checker) -> HaltTier:
    if cli_value:
        return parse_halt_tier(cli_value)
    env_value = getenv("CRATECTL_HALT_ON")
    if env_value:
        return _configured_tier(env_value, "CRATECTL_HALT_ON")
    if config.halt_on:
        return _configured_tier(config.halt_on, f"{CONFIG_FILE}: [{checker.name}].halt_on")
    return checker.default_halt


def _discover(ctx: RunContext, checker: Checker, target: Path, single: bool) -> list[Module]:
    if single:
        return [single_module(target, repo_root=ctx.repo_root)]
    return find_modules(target, checker.opt_out_marker, repo_root=ctx.repo_root, ctx=ctx)


def _run_plan(ctx: RunContext, orchestrator: Orchestrator, reporter: TextReporter, modules: list[Module], mode: Mode) -> int:
    plan = orchestrator.plan(modules)
    checker = orchestrator.checker
    if ctx.as_json:
        payload = {
            "schema_version": 1,
            "tool": checker.name,
            "run_id": ctx.run_id,
            "status": "ok",
            "mode": mode.value,
            "modules": [
                {"path": module.rel_path, "commands": [checker.command(params, mode) for params in sets]}
                for module, sets in plan
            ],
        }
        print(dumps_json(payload, pretty=False))
        return OK
    for module, sets in plan:
        reporter.module_started(module)
        for params in sets:
            reporter.plan(module, params, checker.command(params, mode))
    return OK


def run_sweep_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    tool = ns.tool
    config = load_tool_config(ctx.repo_root, tool)
    checker = build_checker(tool, config, ctx.repo_root)
    tier = resolve_halt_tier(ns.halt_on, config, checker)
    mode = Mode.CHECK if ns.check_only else Mode.APPLY
    target = Path(ns.path)

    modules = _discover(ctx, checker, target, ns.single_module)
    log_event(
        ctx,
        "info",
        tool,
        "start",
        root=rel_to_root(target, ctx.repo_root),
        modules=len(modules),
        mode=mode.value,
        halt_on=tier.label,
    )
    reporter = TextReporter(tool, sys.stdout, show_params=checker.params_file is not None, verbose=ctx.verbose)
    orchestrator = Orchestrator(
        checker,
        mode,
        HaltPolicy(tier),
        reporter=None if ctx.as_json else reporter,
        ctx=ctx,
        default_params=config.default_params,
    )
    if ns.dry_run:
        return _run_plan(ctx, orchestrator, reporter, modules, mode)

    summary = orchestrator.run(modules)
    payload = build_run_report(
        ctx,
        tool=tool,
        mode=mode.value,
        halt_on=tier,
        root=rel_to_root(target, ctx.repo_root),
        summary=summary,
    )
    if ns.report_file:
        write_report(Path(ns.report_file), payload)
    if ctx.as_json:
        print(dumps_json(payload, pretty=False))
    else:
        reporter.finished(summary)
    log_event(
        ctx,
        "info",
        tool,
        "finish",
        status=summary.status,
        failed=summary.failures,
        total=summary.total,
    )
    return failure_exit_code(summary.failures)
