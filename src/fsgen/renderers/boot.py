"""Boot renderer: supported filesystem lists and support data for the initrd builder, plus udev rules."""

import json
from pathlib import Path

from jinja2 import Environment

from ..schema import GenerationResult

SUPPORTED_FS_FILE = "boot/supported-filesystems.json"
UDEV_RULES_FILE = "etc/udev/rules.d/64-fsgen-btrfs.rules"


def render(
    result: GenerationResult,
    env: Environment,
    output_dir: Path,
) -> None:
    output_dir = Path(output_dir)
    data = {
        "supported_filesystems": result.supported_filesystems,
        "initrd_supported_filesystems": result.initrd_supported_filesystems,
        "support": result.support.model_dump(),
    }
    path = output_dir / SUPPORTED_FS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n")

    if result.support.udev_rules:
        rules = output_dir / UDEV_RULES_FILE
        rules.parent.mkdir(parents=True, exist_ok=True)
        lines = ["# Generated by fsgen. Do not edit!"] + result.support.udev_rules
        rules.write_text("\n".join(lines) + "\n")
