"""
Filesystem configuration schema.

Strongly typed contract between the config loader, the generators and the renderers.
Input models describe what the operator asked for; descriptor models describe what
fsgen derived. Everything here is immutable once built.
"""

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

DEFAULT_FS_TYPE = "auto"
DEFAULT_OPTIONS = "defaults,relatime"


# --- Input: one declaration site of a filesystem ---


class FilesystemPatch(BaseModel):
    """Partial filesystem declaration. Several patches may describe the same entry."""

    mount_point: Optional[str] = None
    device: Optional[str] = None
    devices: Optional[List[str]] = None
    label: Optional[str] = None
    fs_type: Optional[str] = None
    options: Optional[str] = None
    auto_format: Optional[bool] = None
    no_check: Optional[bool] = None
    needed_for_boot: Optional[bool] = None

    model_config = {"extra": "forbid", "frozen": True}


# --- Entry model ---


class FilesystemEntry(BaseModel):
    """One mount request after defaults and merging."""

    name: str  # key the entry was declared under
    mount_point: str
    device: Optional[str] = None
    devices: Optional[List[str]] = None  # set => multi-device entry
    label: Optional[str] = None
    fs_type: str = DEFAULT_FS_TYPE
    options: str = DEFAULT_OPTIONS
    auto_format: bool = False
    no_check: bool = False
    needed_for_boot: bool = False

    model_config = {"extra": "forbid", "frozen": True}

    @model_validator(mode="after")
    def check_device_fields(self) -> "FilesystemEntry":
        if not self.mount_point:
            raise ValueError("mount point must not be empty")
        if not self.mount_point.startswith("/"):
            raise ValueError(f"mount point {self.mount_point!r} must be an absolute path")
        if self.device is not None and self.devices is not None:
            raise ValueError("device and devices are mutually exclusive")
        if self.devices is not None and not self.devices:
            raise ValueError("devices must not be empty when set")
        return self

    @property
    def is_multi_device(self) -> bool:
        return self.devices is not None


class SwapEntry(BaseModel):
    """Device used for paging."""

    device: str

    model_config = {"extra": "forbid", "frozen": True}


# --- Root input snapshot ---


class FilesystemConfig(BaseModel):
    """
    Full configuration input. Serialized as JSON.

    file_systems is either a mapping of entry key -> patch (or list of patches),
    or a list of patches that each name their mount point.
    """

    file_systems: Union[
        Dict[str, Union[FilesystemPatch, List[FilesystemPatch]]],
        List[FilesystemPatch],
    ] = Field(default_factory=dict)
    swap_devices: List[SwapEntry] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}


# --- Unit descriptors ---


class MountUnit(BaseModel):
    """systemd .mount unit for a multi-device filesystem."""

    name: str
    description: str
    what: str
    where: str
    type: str
    options: str
    after: List[str] = Field(default_factory=list)
    before: List[str] = Field(default_factory=list)
    wanted_by: List[str] = Field(default_factory=list)
    requires: List[str] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}


class FormatAction(BaseModel):
    """What a format unit does when it runs: probe device, mkfs if blank."""

    device: str
    fs_type: str

    model_config = {"extra": "forbid", "frozen": True}


class FormatUnit(BaseModel):
    """One-shot systemd .service that formats a blank device before it is mounted."""

    name: str
    description: str
    device: str
    fs_type: str
    wanted_by: List[str] = Field(default_factory=list)
    before: List[str] = Field(default_factory=list)
    after: List[str] = Field(default_factory=list)
    requires: List[str] = Field(default_factory=list)
    requires_mounts_for: List[str] = Field(default_factory=list)
    default_dependencies: bool = False  # must stay off: the unit runs before its own mount
    service_type: str = "oneshot"
    action: FormatAction

    model_config = {"extra": "forbid", "frozen": True}


class TargetUnit(BaseModel):
    """systemd .target grouping other units."""

    name: str
    description: str
    wants: List[str] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}


class FormatOutcome(str, Enum):
    FORMATTED = "formatted"
    SKIPPED = "skipped"  # device already carries a filesystem signature


# --- Filesystem support (kernel modules, packages, initrd hooks) ---


class FilesystemSupport(BaseModel):
    """What the rest of the system needs so the listed filesystem types work."""

    packages: List[str] = Field(default_factory=list)
    kernel_modules: List[str] = Field(default_factory=list)
    initrd_kernel_modules: List[str] = Field(default_factory=list)
    initrd_extra_utils: List[str] = Field(default_factory=list)  # binaries copied into the initrd
    initrd_symlinks: Dict[str, str] = Field(default_factory=dict)  # link name -> target
    initrd_post_device_commands: List[str] = Field(default_factory=list)
    udev_rules: List[str] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}


# --- Root output ---


class GenerationResult(BaseModel):
    """
    Everything derived from one FilesystemConfig. Serialized as generation.json
    so renderers can be re-run without regenerating.
    """

    fstab: str
    mount_units: List[MountUnit] = Field(default_factory=list)
    format_units: List[FormatUnit] = Field(default_factory=list)
    targets: List[TargetUnit] = Field(default_factory=list)
    supported_filesystems: List[str] = Field(default_factory=list)
    initrd_supported_filesystems: List[str] = Field(default_factory=list)
    support: FilesystemSupport = Field(default_factory=FilesystemSupport)

    model_config = {"extra": "forbid", "frozen": True}
