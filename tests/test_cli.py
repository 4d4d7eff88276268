"""Command line tests."""
from pathlib import Path

import pytest

import preset_bundles as pb


def test_defaults_to_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    args = pb.parse_args([])

    assert args.directory == Path.cwd()
    assert args.kind is pb.BundleKind.FILAMENT
    assert not args.keep
    assert args.report is None


def test_dir_option():
    args = pb.parse_args(["-d", "bundles", "--kind", "process", "--keep"])

    assert args.directory == Path("bundles")
    assert args.kind is pb.BundleKind.PROCESS
    assert args.keep


def test_positional_and_option_conflict():
    with pytest.raises(SystemExit):
        pb.parse_args(["one", "--dir", "two"])


def test_unknown_kind():
    with pytest.raises(SystemExit):
        pb.parse_args(["--kind", "gcode"])


def test_main_success(bundle):
    assert pb.main([str(bundle.parent)]) == 0
    assert (bundle.parent / "MyBundle.orca_filament").is_file()
    assert not (bundle / "A" / "child.json").exists()


def test_main_keep(bundle):
    assert pb.main(["--dir", str(bundle), "--keep"]) == 0
    assert (bundle / "A" / "child.json").is_file()


def test_main_missing_archiver(bundle, monkeypatch, capsys):
    monkeypatch.setattr(pb.ZipArchiver, "available", lambda self: False)

    assert pb.main([str(bundle)]) == 1
    assert "not available" in capsys.readouterr().err
    assert not (bundle.parent / "MyBundle.orca_filament").exists()
