"""Tests for argument parsing and the fsgen entry point."""

import json
from pathlib import Path

import pytest

from fsgen.__main__ import main
from fsgen.cli import parse_args


def test_generate_defaults():
    args = parse_args(["generate"])
    assert args.command == "generate"
    assert args.config == Path("filesystems.json")
    assert args.output_dir == Path("./fsgen-output")
    assert args.from_result is None
    assert args.generate_only is False
    assert args.commit is False
    assert args.print_fstab is False
    assert args.verbose is False


def test_generate_all_flags():
    args = parse_args([
        "generate",
        "--config", "/etc/fsgen/fs.json",
        "--output-dir", "/tmp/out",
        "--from-result", "/tmp/generation.json",
        "--generate-only",
        "--commit",
        "--print-fstab",
        "--verbose",
    ])
    assert args.config == Path("/etc/fsgen/fs.json")
    assert args.output_dir == Path("/tmp/out")
    assert args.from_result == Path("/tmp/generation.json")
    assert args.generate_only is True
    assert args.commit is True
    assert args.print_fstab is True
    assert args.verbose is True


def test_format_device_args():
    args = parse_args(["format-device", "--fs-type", "ext4", "/dev/sdb"])
    assert args.command == "format-device"
    assert args.device == "/dev/sdb"
    assert args.fs_type == "ext4"


def test_command_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_format_device_requires_fs_type():
    with pytest.raises(SystemExit):
        parse_args(["format-device", "/dev/sdb"])


def test_main_generate(config_path, fixtures_dir, tmp_path, capsys):
    out = tmp_path / "out"
    rc = main(["generate", "--config", str(config_path), "--output-dir", str(out), "--print-fstab"])
    assert rc == 0
    assert (out / "generation.json").exists()
    assert (out / "etc/fstab").read_text() == (fixtures_dir / "expected_fstab").read_text()
    assert capsys.readouterr().out == (fixtures_dir / "expected_fstab").read_text()


def test_main_generate_only(config_path, tmp_path):
    out = tmp_path / "out"
    assert main(["generate", "--config", str(config_path), "--output-dir", str(out), "--generate-only"]) == 0
    assert (out / "generation.json").exists()
    assert not (out / "etc").exists()


def test_main_from_result(config_path, tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    assert main(["generate", "--config", str(config_path), "--output-dir", str(first)]) == 0
    assert main([
        "generate", "--from-result", str(first / "generation.json"),
        "--config", str(tmp_path / "does-not-exist.json"),
        "--output-dir", str(second),
    ]) == 0
    assert (first / "etc/fstab").read_text() == (second / "etc/fstab").read_text()


def test_main_config_error_exit_status(tmp_path, capsys):
    cfg = tmp_path / "fs.json"
    cfg.write_text(json.dumps({"file_systems": {"/data": {"device": "/dev/sda", "devices": ["/dev/sdb"]}}}))
    out = tmp_path / "out"
    rc = main(["generate", "--config", str(cfg), "--output-dir", str(out)])
    assert rc == 2
    assert "configuration error" in capsys.readouterr().err
    assert not out.exists()


def test_main_format_device_missing(tmp_path, capsys):
    rc = main(["format-device", "--fs-type", "ext4", str(tmp_path / "absent")])
    assert rc == 1
    assert "does not exist" in capsys.readouterr().err
