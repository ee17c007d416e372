"""Tests for the initrd/runtime filesystem type lists and per-type support data."""

from fsgen import support
from fsgen.aggregate import initrd_types, runtime_types
from fsgen.support import filesystem_support


def test_runtime_types_keep_every_entry(make_entry):
    entries = [
        make_entry("/", device="/dev/sda1", fs_type="ext4"),
        make_entry("/home", device="/dev/sda2", fs_type="ext4"),
        make_entry("/media", device="/dev/sdb1"),
        make_entry("/data", devices=["/dev/sdc", "/dev/sdd"], fs_type="btrfs"),
    ]
    assert runtime_types(entries) == ["ext4", "ext4", "auto", "btrfs"]


def test_initrd_types_root_and_needed_for_boot(make_entry):
    entries = [
        make_entry("/home", device="/dev/sda2", fs_type="xfs"),
        make_entry("/", device="/dev/sda1", fs_type="ext4"),
        make_entry("/nix", device="/dev/sda3", fs_type="btrfs", needed_for_boot=True),
        make_entry("/var", device="/dev/sda4", fs_type="ext4", needed_for_boot=True),
    ]
    assert initrd_types(entries) == ["ext4", "btrfs", "ext4"]


def test_empty_entries():
    assert runtime_types([]) == []
    assert initrd_types([]) == []


def test_base_support_without_btrfs():
    s = filesystem_support(["ext4", "vfat"], ["ext4"])
    assert s.packages == ["ntfs-3g", "cifs-utils", "dosfstools"]
    assert s.kernel_modules == []
    assert s.initrd_kernel_modules == []
    assert s.udev_rules == []


def test_btrfs_runtime_only():
    s = filesystem_support(["ext4", "btrfs", "btrfs"], ["ext4"])
    assert "btrfs-progs" in s.packages
    assert s.kernel_modules == ["btrfs", "crc32c"]
    assert s.initrd_kernel_modules == []
    assert s.initrd_extra_utils == []
    assert len(s.udev_rules) == 1
    assert "device scan" in s.udev_rules[0]


def test_btrfs_in_initrd():
    s = filesystem_support(["btrfs"], ["btrfs"])
    assert s.initrd_kernel_modules == ["btrfs", "crc32c"]
    assert s.initrd_extra_utils == ["btrfsck", "btrfs"]
    assert s.initrd_symlinks == {"fsck.btrfs": "btrfsck"}
    assert s.initrd_post_device_commands == ["btrfs device scan"]


def test_support_lists_deduplicated_across_handlers(monkeypatch):
    def _extra(runtime, initrd, acc, symlinks):
        acc["kernel_modules"].append("crc32c")
        acc["packages"].append("dosfstools")
        symlinks["fsck.vfat"] = "fsck.fat"

    monkeypatch.setattr(support, "HANDLERS", support.HANDLERS + [_extra])
    s = support.filesystem_support(["btrfs"], ["btrfs"])
    assert s.kernel_modules == ["btrfs", "crc32c"]
    assert s.packages == ["ntfs-3g", "cifs-utils", "dosfstools", "btrfs-progs"]
    assert s.initrd_symlinks == {"fsck.btrfs": "btrfsck", "fsck.vfat": "fsck.fat"}
