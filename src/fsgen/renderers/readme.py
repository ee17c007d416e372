"""README.md renderer: summary of what was generated and where it went."""

from pathlib import Path

from jinja2 import Environment

from ..schema import GenerationResult
from .boot import SUPPORTED_FS_FILE, UDEV_RULES_FILE
from .units import UNIT_DIR

README_FILE = "README.md"


def render(
    result: GenerationResult,
    env: Environment,
    output_dir: Path,
) -> None:
    output_dir = Path(output_dir)
    lines = ["# fsgen output", ""]
    lines.append("## Artifacts")
    lines.append("")
    lines.append("- `etc/fstab` — mount table for single-device filesystems and swap")
    if result.mount_units or result.format_units or result.targets:
        lines.append(f"- `{UNIT_DIR}/` — systemd units")
    lines.append(f"- `{SUPPORTED_FS_FILE}` — filesystem types, kernel modules and packages")
    if result.support.udev_rules:
        lines.append(f"- `{UDEV_RULES_FILE}` — udev rules")
    lines.append("")

    if result.mount_units:
        lines.append("## Multi-device mounts")
        lines.append("")
        for m in result.mount_units:
            lines.append(f"- `{m.name}`: {m.where} ({m.type}) from {', '.join(m.requires)}")
        lines.append("")

    if result.format_units:
        lines.append("## Auto-format")
        lines.append("")
        lines.append("These devices are formatted on first boot if blkid finds no filesystem signature.")
        lines.append("")
        for f in result.format_units:
            lines.append(f"- `{f.device}` as {f.fs_type} (`{f.name}`)")
        lines.append("")

    lines.append("## Filesystem types")
    lines.append("")
    lines.append(f"- Runtime: {', '.join(result.supported_filesystems) or '—'}")
    lines.append(f"- Initrd: {', '.join(result.initrd_supported_filesystems) or '—'}")
    lines.append("")
    (output_dir / README_FILE).write_text("\n".join(lines))
