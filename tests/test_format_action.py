"""
Tests for the format action run by generated mkfs-*.service units.
blkid and mkfs are answered by a fixture executor; no disks are touched.
"""

import pytest

from fsgen.errors import DeviceMissing, FormatFailed, ProbeFailed
from fsgen.executor import RunResult
from fsgen.format_action import probe_signature, run_format_action
from fsgen.schema import FormatAction, FormatOutcome


class FixtureExecutor:
    """Records commands; answers blkid with a canned result and mkfs with mkfs_rc."""

    def __init__(self, blkid: RunResult, mkfs_rc: int = 0):
        self.blkid = blkid
        self.mkfs_rc = mkfs_rc
        self.calls = []

    def __call__(self, cmd):
        self.calls.append(cmd)
        if cmd[0] == "blkid":
            return self.blkid
        if cmd[0].startswith("mkfs."):
            return RunResult(stdout="", stderr="mkfs error" if self.mkfs_rc else "", returncode=self.mkfs_rc)
        return RunResult(stdout="", stderr="unknown command", returncode=127)


@pytest.fixture
def device(tmp_path):
    dev = tmp_path / "sdb"
    dev.write_bytes(b"\0" * 16)
    return str(dev)


NOTHING_FOUND = RunResult(stdout="", stderr="", returncode=2)


def test_missing_device_raises(tmp_path):
    executor = FixtureExecutor(NOTHING_FOUND)
    action = FormatAction(device=str(tmp_path / "absent"), fs_type="ext4")
    with pytest.raises(DeviceMissing):
        run_format_action(action, executor)
    assert executor.calls == []


def test_blank_device_is_formatted(device):
    executor = FixtureExecutor(NOTHING_FOUND)
    outcome = run_format_action(FormatAction(device=device, fs_type="ext4"), executor)
    assert outcome == FormatOutcome.FORMATTED
    assert executor.calls[-1] == ["mkfs.ext4", device]


def test_existing_signature_is_left_alone(device, caplog):
    executor = FixtureExecutor(RunResult(stdout="ext4\n", stderr="", returncode=0))
    with caplog.at_level("INFO", logger="fsgen.format_action"):
        outcome = run_format_action(FormatAction(device=device, fs_type="ext4"), executor)
    assert outcome == FormatOutcome.SKIPPED
    assert not any(c[0].startswith("mkfs.") for c in executor.calls)
    assert "format skipped" in caplog.text


def test_foreign_signature_is_never_reformatted(device):
    executor = FixtureExecutor(RunResult(stdout="ntfs\n", stderr="", returncode=0))
    outcome = run_format_action(FormatAction(device=device, fs_type="xfs"), executor)
    assert outcome == FormatOutcome.SKIPPED
    assert len(executor.calls) == 1


def test_ambivalent_probe_counts_as_signature(device):
    executor = FixtureExecutor(RunResult(stdout="", stderr="ambivalent result", returncode=8))
    assert run_format_action(FormatAction(device=device, fs_type="ext4"), executor) == FormatOutcome.SKIPPED


def test_probe_failure_raises(device):
    executor = FixtureExecutor(RunResult(stdout="", stderr="blkid: command not found", returncode=127))
    with pytest.raises(ProbeFailed):
        run_format_action(FormatAction(device=device, fs_type="ext4"), executor)
    assert len(executor.calls) == 1


def test_mkfs_failure_raises(device):
    executor = FixtureExecutor(NOTHING_FOUND, mkfs_rc=1)
    with pytest.raises(FormatFailed, match="mkfs error"):
        run_format_action(FormatAction(device=device, fs_type="ext4"), executor)


def test_probe_command(device):
    executor = FixtureExecutor(RunResult(stdout="btrfs\n", stderr="", returncode=0))
    assert probe_signature(device, executor) == "btrfs"
    assert executor.calls == [["blkid", "-p", "-s", "TYPE", "-o", "value", device]]


def test_custom_exists_check():
    executor = FixtureExecutor(NOTHING_FOUND)
    outcome = run_format_action(
        FormatAction(device="/dev/sdz", fs_type="vfat"), executor, exists=lambda p: p == "/dev/sdz"
    )
    assert outcome == FormatOutcome.FORMATTED
    assert executor.calls[-1] == ["mkfs.vfat", "/dev/sdz"]
