"""Per-module parameter sets.

A parameter file holds one argument set per line. Lines are split on runs of
whitespace with no quoting support, so a single argument can never contain a
space. Blank lines and lines starting with `#` are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG

COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class ParamSet:
    args: tuple[str, ...]
    line: int | None = None

    @property
    def label(self) -> str:
        return " ".join(self.args)


def tokenize(line: str) -> tuple[str, ...]:
    return tuple(line.split())


def parse_param_lines(text: str) -> list[ParamSet]:
    sets: list[ParamSet] = []
    for lineno, raw in enumerate(text.split("\n"), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        sets.append(ParamSet(tokenize(stripped), lineno))
    return sets


def read_param_sets(module_dir: Path, file_name: str | None, default: tuple[str, ...]) -> list[ParamSet]:
    if file_name is None:
        return [ParamSet(default)]
    path = module_dir / file_name
    if not path.exists():
        return [ParamSet(default)]
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptError(f"unable to read parameter file {path}: {exc}", ERR_CONFIG, kind="params_file") from exc
    return parse_param_lines(text)
