from __future__ import annotations

from pathlib import Path
from typing import Any

from ..contracts.schema.validate import validate_self
from ..core.context import RunContext
from ..core.serialize import write_json
from ..engine.halt import HaltTier
from ..engine.orchestrator import RunSummary

RUN_REPORT_SCHEMA = "cratectl.run-report.v1"


def build_run_report(
    ctx: RunContext,
    *,
    tool: str,
    mode: str,
    halt_on: HaltTier,
    root: str,
    summary: RunSummary,
) -> dict[str, Any]:
    modules = [
        {
            "path": module.rel_path,
            "results": [
                {
                    "params": list(row.params.args),
                    "status": row.status,
                    "files": list(row.outcome.paths),
                    "duration_ms": row.duration_ms,
                }
                for row in summary.results_for(module)
            ],
        }
        for module in summary.modules
    ]
    payload: dict[str, Any] = {
        "schema_name": RUN_REPORT_SCHEMA,
        "schema_version": 1,
        "tool": tool,
        "run_id": ctx.run_id,
        "status": summary.status,
        "mode": mode,
        "halt_on": halt_on.label,
        "halted_at": summary.halted_at.label if summary.halted_at is not None else None,
        "root": root,
        "failed_count": summary.failures,
        "total_count": summary.total,
        "modules": modules,
    }
    return validate_self(RUN_REPORT_SCHEMA, payload)


def write_report(path: Path, payload: dict[str, Any]) -> Path:
    return write_json(path, payload)
