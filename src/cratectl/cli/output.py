"""CLI error rendering."""

from __future__ import annotations

from ..core.serialize import dumps_json


def render_error(*, as_json: bool, message: str, code: int) -> str:
    if as_json:
        return dumps_json(
            {
                "schema_name": "cratectl.error.v1",
                "schema_version": 1,
                "tool": "cratectl",
                "status": "error",
                "errors": [{"code": code, "message": message}],
            },
            pretty=False,
        )
    return message
