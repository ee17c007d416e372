"""
Resolver: split entries into single-device and multi-device groups and work out
which device path a single-device entry mounts. Purely syntactic, no I/O.
"""

from typing import Dict, List, Sequence, Tuple

from .errors import ConfigError
from .schema import FilesystemEntry

LABEL_DIR = "/dev/disk/by-label"


def check_unique_mount_points(entries: Sequence[FilesystemEntry]) -> None:
    seen: Dict[str, str] = {}
    for e in entries:
        if e.mount_point in seen:
            raise ConfigError(
                f"mount point {e.mount_point} is declared by both "
                f"file_systems.{seen[e.mount_point]} and file_systems.{e.name}"
            )
        seen[e.mount_point] = e.name


def split_entries(
    entries: Sequence[FilesystemEntry],
) -> Tuple[List[FilesystemEntry], List[FilesystemEntry]]:
    """Return (single_device, multi_device), each in input order."""
    check_unique_mount_points(entries)
    single = [e for e in entries if not e.is_multi_device]
    multi = [e for e in entries if e.is_multi_device]
    return single, multi


def resolve_device(entry: FilesystemEntry) -> str:
    """Device path for a single-device entry: device as given, else its by-label path."""
    if entry.device is not None:
        return entry.device
    if entry.label is not None:
        return f"{LABEL_DIR}/{entry.label}"
    raise ConfigError(f"file_systems.{entry.name}: no device or label specified")
