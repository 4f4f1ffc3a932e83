from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..core.process import CommandResult, run_command
from ..engine.halt import HaltTier
from ..modules.locator import Module
from ..modules.params import ParamSet


class Mode(str, Enum):
    APPLY = "apply"
    CHECK = "check"


class OutcomeKind(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    EXECUTION_ERROR = "execution_error"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    paths: tuple[str, ...] = ()
    detail: str = ""

    @property
    def failed(self) -> bool:
        return self.kind is not OutcomeKind.CLEAN

    @classmethod
    def clean(cls) -> "Outcome":
        return cls(OutcomeKind.CLEAN)

    @classmethod
    def dirty(cls, paths: tuple[str, ...] = (), detail: str = "") -> "Outcome":
        return cls(OutcomeKind.DIRTY, paths, detail)

    @classmethod
    def execution_error(cls, detail: str) -> "Outcome":
        return cls(OutcomeKind.EXECUTION_ERROR, (), detail)


class Checker(ABC):
    """One external check tool run per (module, parameter set)."""

    name: str
    opt_out_marker: str
    params_file: str | None = None
    default_params: tuple[str, ...] = ()
    default_halt: HaltTier = HaltTier.MODULE

    def __init__(self, cargo: str = "cargo", repo_root: Path | None = None) -> None:
        self.cargo = cargo
        self.repo_root = repo_root or Path.cwd()

    @abstractmethod
    def command(self, params: ParamSet, mode: Mode) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def interpret(self, module: Module, result: CommandResult, mode: Mode) -> Outcome:
        raise NotImplementedError

    def run(self, module: Module, params: ParamSet, mode: Mode) -> Outcome:
        cmd = self.command(params, mode)
        try:
            result = run_command(cmd, module.path)
        except OSError as exc:
            return Outcome.execution_error(f"unable to execute `{cmd[0]}`: {exc.strerror or exc}")
        return self.interpret(module, result, mode)

    def apply(self, module: Module, params: ParamSet) -> Outcome:
        return self.run(module, params, Mode.APPLY)

    def check(self, module: Module, params: ParamSet) -> Outcome:
        return self.run(module, params, Mode.CHECK)
