"""Repository root detection and root-relative path rendering."""

from __future__ import annotations

import os
from pathlib import Path


def find_repo_root(start: Path) -> Path | None:
    cur = start.resolve()
    if cur.is_file():
        cur = cur.parent
    while True:
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            return None
        cur = cur.parent


def resolve_repo_root(start: Path, configured: str | None = None) -> Path:
    if configured:
        return Path(configured).resolve()
    return find_repo_root(start) or start.resolve()


def rel_to_root(path: Path | str, root: Path) -> str:
    rel = os.path.relpath(os.path.abspath(path), root.resolve())
    return Path(rel).as_posix()
