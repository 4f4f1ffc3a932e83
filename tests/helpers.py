from __future__ import annotations

import json
import os
import stat
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Stand-in for `cargo`: `fmt` lists the names in `dirty.fmt` under --check and
# deletes the file otherwise; `clippy` fails for parameter lines listed in
# `fail.lint`. Every call is appended to $FAKE_CARGO_LOG.
FAKE_CARGO = """#!{python}
import json
import os
import sys
from pathlib import Path

FIXED = {{"clippy", "-q", "--no-deps", "--tests", "--benches", "--examples",
         "--fix", "--allow-dirty", "--allow-staged", "--message-format=short"}}

args = sys.argv[1:]
cwd = Path.cwd()
log = os.environ.get("FAKE_CARGO_LOG")
if log:
    with open(log, "a", encoding="utf-8") as handle:
        handle.write(json.dumps({{"cwd": str(cwd), "args": args}}) + "\\n")

if args[:1] == ["fmt"]:
    dirty = cwd / "dirty.fmt"
    if "--check" in args:
        if dirty.exists():
            for name in dirty.read_text(encoding="utf-8").split():
                print(cwd / name)
        sys.exit(0)
    if dirty.exists():
        dirty.unlink()
    sys.exit(0)

if args[:1] == ["clippy"]:
    head = args[: args.index("--")] if "--" in args else args
    label = " ".join(a for a in head if a not in FIXED)
    failing = cwd / "fail.lint"
    bad = []
    if failing.exists():
        bad = [line.strip() for line in failing.read_text(encoding="utf-8").splitlines() if line.strip()]
    if label in bad:
        print("src/lib.rs:1:1: warning: this could be simpler", file=sys.stderr)
        sys.exit(0 if "--message-format=short" in args else 101)
    sys.exit(0)

sys.exit(2)
"""


def write_fake_cargo(directory: Path) -> Path:
    path = directory / "cargo"
    path.write_text(FAKE_CARGO.format(python=sys.executable), encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def make_crate(root: Path, rel: str, *, params: str | None = None) -> Path:
    crate = root / rel if rel else root
    crate.mkdir(parents=True, exist_ok=True)
    (crate / "Cargo.toml").write_text(f'[package]\nname = "{crate.name}"\n', encoding="utf-8")
    if params is not None:
        (crate / "project.lint").write_text(params, encoding="utf-8")
    return crate


def read_cargo_log(log: Path) -> list[dict[str, object]]:
    if not log.exists():
        return []
    return [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines() if line.strip()]


def run_cratectl(*args: str, cwd: Path, env_extra: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    env.pop("CRATECTL_HALT_ON", None)
    env.update(env_extra or {})
    return subprocess.run(
        [sys.executable, "-m", "cratectl.cli", "--quiet", *args],
        cwd=cwd,
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )
