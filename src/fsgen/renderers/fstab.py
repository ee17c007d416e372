"""fstab renderer: one line per single-device filesystem, one per swap device."""

from pathlib import Path
from typing import List, Sequence

from jinja2 import Environment

from ..resolver import resolve_device
from ..schema import FilesystemEntry, GenerationResult, SwapEntry

FSTAB_FILE = "etc/fstab"
HEADER = "# This is a generated file.  Do not edit!"

# Types fsck has nothing to do for.
_NO_FSCK_TYPES = ("none", "btrfs", "tmpfs")


def fsck_pass_number(entry: FilesystemEntry, device: str) -> int:
    if entry.fs_type in _NO_FSCK_TYPES or device == "none" or entry.no_check:
        return 0
    if entry.mount_point == "/":
        return 1
    return 2


def fstab_line(entry: FilesystemEntry) -> str:
    device = resolve_device(entry)
    return " ".join([
        device,
        entry.mount_point,
        entry.fs_type,
        entry.options,
        "0",
        str(fsck_pass_number(entry, device)),
    ])


def swap_line(swap: SwapEntry) -> str:
    return f"{swap.device} none swap"


def render_fstab(
    single_device: Sequence[FilesystemEntry],
    swap_devices: Sequence[SwapEntry],
) -> str:
    """Full fstab text, newline-terminated. Multi-device entries must not be passed in."""
    lines: List[str] = [HEADER, "", "# Filesystems."]
    for entry in single_device:
        if entry.is_multi_device:
            raise ValueError(f"file_systems.{entry.name} has multiple devices and belongs in a mount unit")
        lines.append(fstab_line(entry))
    lines.append("")
    lines.append("# Swap devices.")
    for sw in swap_devices:
        lines.append(swap_line(sw))
    return "\n".join(lines) + "\n"


def render(
    result: GenerationResult,
    env: Environment,
    output_dir: Path,
) -> None:
    path = Path(output_dir) / FSTAB_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.fstab)
