"""
Filesystem support: what the kernel, initrd and package set need for the configured types.

Each handler looks at the runtime and initrd type lists and contributes to one
FilesystemSupport. Unlike the raw type lists, everything here is de-duplicated.
"""

from typing import Callable, Dict, List, Sequence

from .schema import FilesystemSupport

# Mount helpers every system gets.
BASE_PACKAGES = ["ntfs-3g", "cifs-utils", "dosfstools"]

BTRFS_BIN = "/usr/bin/btrfs"

Handler = Callable[[Sequence[str], Sequence[str], Dict[str, List[str]], Dict[str, str]], None]


def _uniq(items: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _btrfs(
    runtime: Sequence[str],
    initrd: Sequence[str],
    acc: Dict[str, List[str]],
    symlinks: Dict[str, str],
) -> None:
    if "btrfs" not in runtime:
        return
    acc["packages"].append("btrfs-progs")
    acc["kernel_modules"] += ["btrfs", "crc32c"]
    acc["udev_rules"].append(
        f'ACTION=="add|change", SUBSYSTEM=="block", RUN+="{BTRFS_BIN} device scan"'
    )
    if "btrfs" in initrd:
        acc["initrd_kernel_modules"] += ["btrfs", "crc32c"]
        acc["initrd_extra_utils"] += ["btrfsck", "btrfs"]
        symlinks["fsck.btrfs"] = "btrfsck"
        acc["initrd_post_device_commands"].append("btrfs device scan")


HANDLERS: List[Handler] = [
    _btrfs,
]


def filesystem_support(runtime: Sequence[str], initrd: Sequence[str]) -> FilesystemSupport:
    acc: Dict[str, List[str]] = {
        "packages": list(BASE_PACKAGES),
        "kernel_modules": [],
        "initrd_kernel_modules": [],
        "initrd_extra_utils": [],
        "initrd_post_device_commands": [],
        "udev_rules": [],
    }
    symlinks: Dict[str, str] = {}
    for handler in HANDLERS:
        handler(runtime, initrd, acc, symlinks)

    return FilesystemSupport(
        initrd_symlinks=symlinks,
        **{k: _uniq(v) for k, v in acc.items()},
    )
