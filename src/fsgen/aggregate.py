"""Supported filesystem types for the initrd and for the running system."""

from typing import List, Sequence

from .schema import FilesystemEntry


def runtime_types(entries: Sequence[FilesystemEntry]) -> List[str]:
    """fs_type of every entry, in order, duplicates kept."""
    return [e.fs_type for e in entries]


def initrd_types(entries: Sequence[FilesystemEntry]) -> List[str]:
    """fs_type of the root filesystem and of every entry needed for boot."""
    return [e.fs_type for e in entries if e.mount_point == "/" or e.needed_for_boot]
