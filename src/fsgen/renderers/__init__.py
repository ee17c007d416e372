"""
Renderers write a GenerationResult into an output tree.
Each renderer receives the result, a jinja2 Environment and the output directory.

Every run regenerates the tree from scratch: paths owned by fsgen are removed
before any renderer writes, so nothing from an earlier generation survives.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from ..schema import GenerationResult
from .boot import SUPPORTED_FS_FILE, UDEV_RULES_FILE
from .boot import render as render_boot
from .fstab import FSTAB_FILE
from .fstab import render as render_fstab_file
from .readme import README_FILE
from .readme import render as render_readme
from .units import UNIT_DIR, exec_arg
from .units import render as render_units

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Everything below output_dir that fsgen writes. generation.json and .git are not ours to clear.
OWNED_FILES = [FSTAB_FILE, UDEV_RULES_FILE, SUPPORTED_FS_FILE, README_FILE]
OWNED_DIRS = [UNIT_DIR]


def make_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["exec_arg"] = exec_arg
    return env


def _prune_empty_parents(path: Path, root: Path) -> None:
    parent = path.parent
    while parent != root and parent.is_dir() and not any(parent.iterdir()):
        parent.rmdir()
        parent = parent.parent


def clear_output(output_dir: Path) -> None:
    """Remove every artifact a previous generation may have left in output_dir."""
    output_dir = Path(output_dir)
    for rel in OWNED_DIRS:
        path = output_dir / rel
        if path.is_dir():
            shutil.rmtree(path)
            _prune_empty_parents(path, output_dir)
    for rel in OWNED_FILES:
        path = output_dir / rel
        if path.is_file() or path.is_symlink():
            path.unlink()
            _prune_empty_parents(path, output_dir)
    logger.debug("cleared previous output in %s", output_dir)


def run_all(result: GenerationResult, output_dir: Path, env: Optional[Environment] = None) -> None:
    """Run every renderer on a cleared tree. Same result in, same bytes out."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    if env is None:
        env = make_environment()
    clear_output(output_dir)
    render_fstab_file(result, env, output_dir)
    render_units(result, env, output_dir)
    render_boot(result, env, output_dir)
    render_readme(result, env, output_dir)
    logger.info("rendered output to %s", output_dir)
