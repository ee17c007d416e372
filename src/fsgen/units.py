"""
Unit synthesizer: systemd unit descriptors for multi-device mounts and auto-format services.

Only descriptors are produced here; renderers/units.py turns them into unit files.
"""

import logging
import posixpath
from typing import List, Sequence

from .schema import FilesystemEntry, FormatAction, FormatUnit, MountUnit, TargetUnit
from .systemd_escape import escape_systemd_path, unit_name

logger = logging.getLogger(__name__)

LOCAL_FS_TARGET = "local-fs.target"
REMOTE_FS_TARGET = "remote-fs.target"
UDEV_SETTLE = "systemd-udev-settle.service"


def device_unit(device: str) -> str:
    return unit_name(device, "device")


def mount_unit(entry: FilesystemEntry) -> MountUnit:
    """Mount unit for one multi-device entry. Starts only once every member device is up."""
    devices = list(entry.devices or [])
    device_units = [device_unit(d) for d in devices]
    return MountUnit(
        name=unit_name(entry.mount_point, "mount"),
        description=f"Mount of {','.join(devices)}",
        what=devices[0],
        where=entry.mount_point,
        type=entry.fs_type,
        options=entry.options,
        after=[UDEV_SETTLE] + device_units,
        before=[LOCAL_FS_TARGET],
        wanted_by=[LOCAL_FS_TARGET],
        requires=device_units,
    )


def mount_units(multi_device: Sequence[FilesystemEntry]) -> List[MountUnit]:
    return [mount_unit(e) for e in multi_device]


def format_unit(entry: FilesystemEntry) -> FormatUnit:
    device = entry.device
    dev_esc = escape_systemd_path(device)
    mount = unit_name(entry.mount_point, "mount")
    return FormatUnit(
        name=f"mkfs-{dev_esc}.service",
        description=f"Initialisation of Filesystem {device}",
        device=device,
        fs_type=entry.fs_type,
        wanted_by=[mount],
        before=[mount, f"systemd-fsck@{dev_esc}.service"],
        after=[device_unit(device)],
        requires=[device_unit(device)],
        requires_mounts_for=[posixpath.dirname(device)],
        action=FormatAction(device=device, fs_type=entry.fs_type),
    )


def format_units(entries: Sequence[FilesystemEntry]) -> List[FormatUnit]:
    """Format services for entries with auto_format and an explicit device."""
    units = []
    for e in entries:
        if not e.auto_format:
            continue
        if e.device is None:
            logger.warning(
                "file_systems.%s requests auto_format but has no device; no format unit generated",
                e.name,
            )
            continue
        units.append(format_unit(e))
    return units


def filesystem_targets() -> List[TargetUnit]:
    """fs.target pulls in local and remote filesystems."""
    return [
        TargetUnit(
            name="fs.target",
            description="All File Systems",
            wants=[LOCAL_FS_TARGET, REMOTE_FS_TARGET],
        )
    ]
