from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG

CONFIG_FILE = "cratectl.toml"

_COMMON_KEYS = ("halt_on", "cargo", "default_params")
_TOOL_KEYS: dict[str, tuple[str, ...]] = {
    "fmt": _COMMON_KEYS,
    "lint": (*_COMMON_KEYS, "warn", "allow"),
}
_LIST_KEYS = {"default_params", "warn", "allow"}


@dataclass(frozen=True)
class ToolConfig:
    halt_on: str | None = None
    cargo: str | None = None
    default_params: tuple[str, ...] | None = None
    warn: tuple[str, ...] | None = None
    allow: tuple[str, ...] | None = None


def _fail(path: Path, message: str) -> ScriptError:
    return ScriptError(f"{path.name}: {message}", ERR_CONFIG, kind="config")


def _coerce(path: Path, table: str, key: str, value: Any) -> object:
    if key in _LIST_KEYS:
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise _fail(path, f"[{table}].{key} must be a list of strings")
        return tuple(value)
    if not isinstance(value, str) or not value.strip():
        raise _fail(path, f"[{table}].{key} must be a non-empty string")
    return value.strip()


def parse_config(path: Path, text: str) -> dict[str, ToolConfig]:
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise _fail(path, f"invalid TOML: {exc}") from exc
    unknown_tables = sorted(set(raw) - set(_TOOL_KEYS))
    if unknown_tables:
        raise _fail(path, f"unknown table(s): {', '.join(unknown_tables)}")
    configs: dict[str, ToolConfig] = {}
    for table, allowed in _TOOL_KEYS.items():
        section = raw.get(table, {})
        if not isinstance(section, dict):
            raise _fail(path, f"[{table}] must be a table")
        unknown = sorted(set(section) - set(allowed))
        if unknown:
            raise _fail(path, f"unknown key(s) in [{table}]: {', '.join(unknown)}")
        configs[table] = ToolConfig(**{key: _coerce(path, table, key, value) for key, value in section.items()})
    return configs


def load_config(repo_root: Path) -> dict[str, ToolConfig]:
    path = repo_root / CONFIG_FILE
    if not path.is_file():
        return {table: ToolConfig() for table in _TOOL_KEYS}
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise _fail(path, f"unable to read: {exc}") from exc
    return parse_config(path, text)


def load_tool_config(repo_root: Path, tool: str) -> ToolConfig:
    return load_config(repo_root).get(tool, ToolConfig())
