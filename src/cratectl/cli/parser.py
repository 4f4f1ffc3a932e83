from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from .. import __version__
from ..core.exit_codes import ERR_USAGE


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with `ERR_USAGE` on bad invocations."""

    def __init__(self, *args, **kwargs) -> None:  # noqa: ANN002, ANN003
        kwargs.setdefault("allow_abbrev", False)
        super().__init__(*args, **kwargs)

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(ERR_USAGE, f"{self.prog}: error: {message}\n")


def add_global_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--version", action="version", version=f"cratectl {__version__}")
    p.add_argument("--json", action="store_true", help="emit the JSON run report on stdout")
    p.add_argument("--log-json", action="store_true", help="emit structured log events as JSON lines")
    p.add_argument("--run-id", help="run identifier used in logs and reports")
    p.add_argument("--root", help="repository root that reported paths are relative to")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
