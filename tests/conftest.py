"""Shared fixtures and helpers for the preset bundle tests."""
import json
from pathlib import Path

import pytest

import preset_bundles as pb


def write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def make_bundle(root: Path) -> Path:
    """Filament bundle with one flat preset and one inheritance group."""
    write_json(
        root / pb.MANIFEST_NAME,
        {
            "name": "Test filaments",
            "version": "1.0",
            "printer_vendor": [{"vendor": "A", "filament_path": ["A/flat.json"]}],
        },
    )
    write_json(root / "A" / "flat.json", {"name": "flat"})
    write_json(root / "A" / "G" / "base.json", {"x": 1, "y": {"a": 1}})
    write_json(root / "A" / "G" / "child.json", {"y": {"b": 2}, "inherits": "System"})
    return root


@pytest.fixture
def bundle(tmp_path) -> Path:
    return make_bundle(tmp_path / "container" / "MyBundle")
