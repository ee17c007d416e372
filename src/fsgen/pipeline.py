"""
Generation pipeline: config -> entries -> fstab, units, type lists.

All or nothing. A ConfigError anywhere aborts the whole generation; nothing is
returned or written for a config that does not fully validate.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from .aggregate import initrd_types, runtime_types
from .builder import format_validation_error, build_entries
from .errors import ConfigError
from .renderers.fstab import render_fstab
from .resolver import split_entries
from .schema import FilesystemConfig, GenerationResult
from .support import filesystem_support
from .units import filesystem_targets, format_units, mount_units

logger = logging.getLogger(__name__)

RESULT_FILENAME = "generation.json"


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise ConfigError(f"key {key!r} is declared more than once")
        obj[key] = value
    return obj


def load_config(path: Path) -> FilesystemConfig:
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON: {e}") from e
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e
    try:
        return FilesystemConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{path}: {format_validation_error(e)}") from e


def generate(config: FilesystemConfig) -> GenerationResult:
    entries = build_entries(config)
    single, multi = split_entries(entries)

    fstab = render_fstab(single, config.swap_devices)
    runtime = runtime_types(entries)
    initrd = initrd_types(entries)

    result = GenerationResult(
        fstab=fstab,
        mount_units=mount_units(multi),
        format_units=format_units(entries),
        targets=filesystem_targets(),
        supported_filesystems=runtime,
        initrd_supported_filesystems=initrd,
        support=filesystem_support(runtime, initrd),
    )
    logger.debug(
        "generated %d fstab entries, %d swap, %d mount units, %d format units",
        len(single), len(config.swap_devices), len(result.mount_units), len(result.format_units),
    )
    return result


def save_result(result: GenerationResult, path: Path) -> None:
    Path(path).write_text(result.model_dump_json(indent=2) + "\n")


def load_result(path: Path) -> GenerationResult:
    path = Path(path)
    try:
        return GenerationResult.model_validate_json(path.read_text())
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"{path}: {format_validation_error(e)}") from e
