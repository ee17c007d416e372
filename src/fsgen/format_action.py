"""
Format action: what a generated mkfs-*.service does on the target host.

Never reformats. Any filesystem signature blkid recognises, even one of a
different type than requested, leaves the device alone.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from .errors import DeviceMissing, FormatFailed, ProbeFailed
from .executor import Executor, subprocess_executor
from .schema import FormatAction, FormatOutcome

logger = logging.getLogger(__name__)


# blkid -p exit statuses: 0 found, 2 nothing found, 8 ambivalent (several signatures)
_BLKID_NOTHING_FOUND = 2
_BLKID_AMBIVALENT = 8


def probe_signature(device: str, executor: Executor) -> str:
    """Filesystem type blkid reports for device, or "" if there is none."""
    r = executor(["blkid", "-p", "-s", "TYPE", "-o", "value", device])
    if r.returncode == 0:
        return r.stdout.strip()
    if r.returncode == _BLKID_NOTHING_FOUND:
        return ""
    if r.returncode == _BLKID_AMBIVALENT:
        return "ambivalent"
    raise ProbeFailed(device, r.returncode, r.stderr)


def run_format_action(
    action: FormatAction,
    executor: Optional[Executor] = None,
    exists: Callable[[str], bool] = lambda p: Path(p).exists(),
) -> FormatOutcome:
    if executor is None:
        executor = subprocess_executor

    if not exists(action.device):
        raise DeviceMissing(action.device)

    existing = probe_signature(action.device, executor)
    if existing:
        logger.info("format skipped: %s already contains a %s filesystem", action.device, existing)
        return FormatOutcome.SKIPPED

    logger.info("creating %s filesystem on %s...", action.fs_type, action.device)
    r = executor([f"mkfs.{action.fs_type}", action.device])
    if r.returncode != 0:
        raise FormatFailed(action.device, action.fs_type, r.returncode, r.stderr)
    return FormatOutcome.FORMATTED
