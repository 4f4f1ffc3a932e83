from __future__ import annotations

from pathlib import Path

from ..core.repo_root import rel_to_root
from ..modules.locator import Module


def resolve_reported(module: Module, raw: str, repo_root: Path) -> Path:
    """Locate a file path printed by cargo.

    Cargo prints paths relative to the workspace root, which may be an
    ancestor of the module directory.
    """
    reported = Path(raw)
    if reported.is_absolute():
        return reported
    root = repo_root.resolve()
    base = module.path
    while True:
        candidate = base / reported
        if candidate.exists():
            return candidate
        if base == root or base.parent == base:
            return module.path / reported
        base = base.parent


def reported_files(module: Module, raws: list[str], repo_root: Path) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for raw in raws:
        seen.setdefault(rel_to_root(resolve_reported(module, raw, repo_root), repo_root), None)
    return tuple(seen)
