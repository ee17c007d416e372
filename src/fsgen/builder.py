"""
Entry builder: merge partial filesystem declarations into FilesystemEntry objects.

A filesystem may be declared from several places (a base profile, a host overlay, ...).
Patches for the same key are merged field by field:

- options: every patch that sets options contributes, joined with "," in declaration
  order. Repeats are kept. With no options anywhere the default applies.
- mount_point, device, devices, label, fs_type: a later patch may repeat an earlier
  value; setting a different value is a conflict and raises ConfigError.
- auto_format, no_check, needed_for_boot: enabled if any patch enables them.
"""

from typing import Dict, Iterable, List, Union

from pydantic import ValidationError

from .errors import ConfigError
from .schema import (
    DEFAULT_FS_TYPE,
    DEFAULT_OPTIONS,
    FilesystemConfig,
    FilesystemEntry,
    FilesystemPatch,
)

PatchLike = Union[FilesystemPatch, dict]

_SCALAR_FIELDS = ("mount_point", "device", "devices", "label", "fs_type")
_FLAG_FIELDS = ("auto_format", "no_check", "needed_for_boot")


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        msg = err.get("msg", "")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def _as_patch(name: str, patch: PatchLike) -> FilesystemPatch:
    if isinstance(patch, FilesystemPatch):
        return patch
    try:
        return FilesystemPatch.model_validate(patch)
    except ValidationError as e:
        raise ConfigError(f"file_systems.{name}: {format_validation_error(e)}") from e


def merge_patches(name: str, patches: Iterable[PatchLike]) -> FilesystemEntry:
    """Merge every patch declared for `name` and apply defaults."""
    scalars: Dict[str, object] = {}
    flags = {f: False for f in _FLAG_FIELDS}
    options: List[str] = []

    for raw in patches:
        patch = _as_patch(name, raw)
        for field in _SCALAR_FIELDS:
            value = getattr(patch, field)
            if value is None:
                continue
            if field in scalars and scalars[field] != value:
                raise ConfigError(
                    f"file_systems.{name}.{field} is defined with conflicting values "
                    f"{scalars[field]!r} and {value!r}"
                )
            scalars[field] = value
        for field in _FLAG_FIELDS:
            if getattr(patch, field):
                flags[field] = True
        if patch.options is not None:
            options.append(patch.options)

    try:
        return FilesystemEntry(
            name=name,
            mount_point=scalars.get("mount_point", name),
            device=scalars.get("device"),
            devices=scalars.get("devices"),
            label=scalars.get("label"),
            fs_type=scalars.get("fs_type", DEFAULT_FS_TYPE),
            options=",".join(options) if options else DEFAULT_OPTIONS,
            **flags,
        )
    except ValidationError as e:
        raise ConfigError(f"file_systems.{name}: {format_validation_error(e)}") from e


def normalize_entry(name: str, patch: Union[PatchLike, List[PatchLike]]) -> FilesystemEntry:
    """Validate one raw entry (or the list of patches declared for it)."""
    if isinstance(patch, list):
        return merge_patches(name, patch)
    return merge_patches(name, [patch])


class EntryBuilder:
    """Collects patches per entry key; build() merges them in first-declared order."""

    def __init__(self) -> None:
        self._patches: Dict[str, List[PatchLike]] = {}

    def add(self, name: str, patch: PatchLike) -> "EntryBuilder":
        self._patches.setdefault(name, []).append(patch)
        return self

    def extend(self, name: str, patches: Iterable[PatchLike]) -> "EntryBuilder":
        for p in patches:
            self.add(name, p)
        return self

    def build(self) -> List[FilesystemEntry]:
        return [merge_patches(name, patches) for name, patches in self._patches.items()]


def build_entries(config: FilesystemConfig) -> List[FilesystemEntry]:
    """Turn the file_systems section of a config into merged entries."""
    builder = EntryBuilder()
    if isinstance(config.file_systems, list):
        for i, patch in enumerate(config.file_systems):
            if not patch.mount_point:
                raise ConfigError(f"file_systems[{i}]: list entries must set mount_point")
            builder.add(str(i), patch)
    else:
        for name, value in config.file_systems.items():
            if isinstance(value, list):
                builder.extend(name, value)
            else:
                builder.add(name, value)
    return builder.build()
