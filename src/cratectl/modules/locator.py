"""Crate discovery over a directory subtree.

Traversal is pre-order and depth-first with children visited in
lexicographic order, so output and early-abort behavior are reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG, ERR_NOT_MODULE
from ..core.logging import log_event
from ..core.repo_root import rel_to_root

MANIFEST_NAME = "Cargo.toml"
BUILD_OUTPUT_DIR = "target"
HIDDEN_PREFIX = "."


@dataclass(frozen=True)
class Module:
    path: Path
    rel_path: str

    @classmethod
    def at(cls, path: Path, repo_root: Path) -> "Module":
        absolute = path.absolute()
        return cls(path=absolute, rel_path=rel_to_root(absolute, repo_root))


def _skip_child(entry: Path) -> bool:
    return entry.name.startswith(HIDDEN_PREFIX) or entry.name == BUILD_OUTPUT_DIR


def _unreadable(ctx: RunContext | None, directory: Path, repo_root: Path, exc: OSError) -> None:
    if ctx is not None:
        log_event(ctx, "warn", "locator", "skip", path=rel_to_root(directory, repo_root), error=exc.strerror or exc)


def _child_dirs(directory: Path) -> list[Path]:
    return sorted((entry for entry in directory.iterdir() if entry.is_dir() and not _skip_child(entry)), key=lambda p: p.name)


def _require_dir(root: Path) -> Path:
    if not root.exists():
        raise ScriptError(f"path does not exist: {root}", ERR_CONFIG, kind="missing_path")
    if not root.is_dir():
        raise ScriptError(f"path is not a directory: {root}", ERR_CONFIG, kind="missing_path")
    return root.resolve()


def iter_modules(
    root: Path, opt_out_marker: str, *, repo_root: Path, ctx: RunContext | None = None
) -> Iterator[Module]:
    """Yield crates below `root`.

    A directory that cannot be listed is reported through `ctx` and skipped;
    the rest of the tree is still visited.
    """
    start = _require_dir(root)
    stack: list[Path] = [start]
    seen: set[Path] = set()
    while stack:
        current = stack.pop()
        real = current.resolve()
        if real in seen:
            continue
        seen.add(real)
        try:
            opted_out = (current / opt_out_marker).exists()
            is_module = not opted_out and (current / MANIFEST_NAME).is_file()
        except OSError as exc:
            _unreadable(ctx, current, repo_root, exc)
            continue
        if opted_out:
            continue
        if is_module:
            yield Module.at(current, repo_root)
        try:
            children = _child_dirs(current)
        except OSError as exc:
            _unreadable(ctx, current, repo_root, exc)
            continue
        stack.extend(reversed(children))


def find_modules(
    root: Path, opt_out_marker: str, *, repo_root: Path, ctx: RunContext | None = None
) -> list[Module]:
    return list(iter_modules(root, opt_out_marker, repo_root=repo_root, ctx=ctx))


def single_module(path: Path, *, repo_root: Path) -> Module:
    directory = _require_dir(path)
    if not (directory / MANIFEST_NAME).is_file():
        raise ScriptError(f"{rel_to_root(directory, repo_root)}: not a crate!", ERR_NOT_MODULE, kind="not_a_module")
    return Module.at(directory, repo_root)
