from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import settings

from helpers import write_fake_cargo

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("cratectl", deadline=None)
settings.load_profile("cratectl")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def clean_cratectl_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CRATECTL_CARGO", "CRATECTL_HALT_ON", "CRATECTL_ROOT", "CRATECTL_LOG_JSON", "RUN_ID"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_cargo(tmp_path: Path) -> dict[str, str]:
    bin_dir = tmp_path / "_bin"
    bin_dir.mkdir()
    cargo = write_fake_cargo(bin_dir)
    return {"CRATECTL_CARGO": str(cargo), "FAKE_CARGO_LOG": str(tmp_path / "_cargo.log")}


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    return root
