from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..commands.sweep import TOOL_HELP, add_sweep_arguments, configure_sweep_parsers, run_sweep_command
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL
from .output import render_error
from .parser import UsageParser, add_global_arguments


def build_parser() -> argparse.ArgumentParser:
    p = UsageParser(prog="cratectl", description="run cargo fmt/clippy over every crate in a directory subtree")
    add_global_arguments(p)
    sub = p.add_subparsers(dest="cmd", required=True)
    configure_sweep_parsers(sub)
    return p


def build_tool_parser(tool: str) -> argparse.ArgumentParser:
    p = UsageParser(prog=f"cratectl-{tool}", description=TOOL_HELP[tool])
    add_global_arguments(p)
    add_sweep_arguments(p, tool)
    p.set_defaults(cmd=tool)
    return p


def _dispatch(ns: argparse.Namespace) -> int:
    as_json = bool(ns.json)
    try:
        ctx = RunContext.from_args(
            ns.run_id,
            Path(ns.path),
            ns.root,
            "json" if ns.json else "text",
            ns.verbose,
            ns.quiet,
            ns.log_json,
        )
        return run_sweep_command(ctx, ns)
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


def main(argv: list[str] | None = None) -> int:
    return _dispatch(build_parser().parse_args(argv))


def fmt_main(argv: list[str] | None = None) -> int:
    return _dispatch(build_tool_parser("fmt").parse_args(argv))


def lint_main(argv: list[str] | None = None) -> int:
    return _dispatch(build_tool_parser("lint").parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
