"""systemd unit renderer: mount, format and target descriptors -> unit files via jinja2 templates."""

import logging
import re
from pathlib import Path

from jinja2 import Environment

from ..schema import FormatUnit, GenerationResult, MountUnit, TargetUnit

logger = logging.getLogger(__name__)

UNIT_DIR = "etc/systemd/system"
FSGEN_BIN = "/usr/bin/fsgen"

_PLAIN_ARG = re.compile(r"^[A-Za-z0-9_@+=:,./-]+$")


def exec_arg(value: str) -> str:
    """Quote one ExecStart= argument. % is a unit specifier and must be doubled."""
    value = value.replace("%", "%%")
    if _PLAIN_ARG.match(value):
        return value
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def render_mount_unit(unit: MountUnit, env: Environment) -> str:
    return env.get_template("mount.j2").render(unit=unit)


def render_format_unit(unit: FormatUnit, env: Environment, fsgen_bin: str = FSGEN_BIN) -> str:
    return env.get_template("format.j2").render(unit=unit, fsgen_bin=fsgen_bin)


def render_target_unit(unit: TargetUnit, env: Environment) -> str:
    return env.get_template("target.j2").render(unit=unit)


def render(
    result: GenerationResult,
    env: Environment,
    output_dir: Path,
) -> None:
    unit_dir = Path(output_dir) / UNIT_DIR
    unit_dir.mkdir(parents=True, exist_ok=True)

    for m in result.mount_units:
        (unit_dir / m.name).write_text(render_mount_unit(m, env))
    for f in result.format_units:
        (unit_dir / f.name).write_text(render_format_unit(f, env))
    for t in result.targets:
        (unit_dir / t.name).write_text(render_target_unit(t, env))

    logger.debug(
        "wrote %d mount, %d format, %d target units to %s",
        len(result.mount_units), len(result.format_units), len(result.targets), unit_dir,
    )
