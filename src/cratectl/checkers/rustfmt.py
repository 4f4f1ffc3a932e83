from __future__ import annotations

from ..core.process import CommandResult
from ..engine.halt import HaltTier
from ..modules.locator import Module
from ..modules.params import ParamSet
from .base import Checker, Mode, Outcome
from .paths import reported_files


class RustfmtChecker(Checker):
    name = "fmt"
    opt_out_marker = "skip.format"
    params_file = None
    default_params = ()
    default_halt = HaltTier.MODULE

    def command(self, params: ParamSet, mode: Mode) -> list[str]:
        if mode is Mode.APPLY:
            return [self.cargo, "fmt", *params.args]
        return [self.cargo, "fmt", "--check", *params.args, "--", "-l"]

    def interpret(self, module: Module, result: CommandResult, mode: Mode) -> Outcome:
        if mode is Mode.APPLY:
            return Outcome.clean() if result.code == 0 else Outcome.dirty(detail=result.combined_output)
        # rustfmt reports files needing change on stdout; its exit code is not reliable for this
        listed = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if listed:
            return Outcome.dirty(reported_files(module, listed, self.repo_root), result.stderr.strip())
        if result.code != 0:
            return Outcome.dirty(detail=result.combined_output)
        return Outcome.clean()
