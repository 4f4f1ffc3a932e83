"""Cratectl contract schemas."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

from ...core.errors import ScriptError
from ...core.exit_codes import ERR_VALIDATION


def schemas_root() -> Path:
    """Return the packaged schema directory path."""
    return Path(str(resources.files(__package__) / "schemas"))


def schema_path_for(schema_name: str) -> Path:
    path = schemas_root() / f"{schema_name}.schema.json"
    if not path.is_file():
        raise ScriptError(f"unknown schema: {schema_name}", ERR_VALIDATION, kind="schema")
    return path
