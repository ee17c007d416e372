"""
Command execution for the format action.

The format action never calls subprocess directly. It goes through an executor
so tests can answer blkid/mkfs with canned results instead of touching disks.
"""

import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass
class RunResult:
    """Result of running a command (or of a canned answer)."""

    stdout: str
    stderr: str
    returncode: int


class Executor(Protocol):
    def __call__(self, cmd: List[str]) -> RunResult:
        ...


def subprocess_executor(cmd: List[str], timeout: Optional[float] = None) -> RunResult:
    """Default implementation. mkfs on a large device can be slow, so no timeout by default."""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        return RunResult(
            stdout=e.stdout.decode() if isinstance(e.stdout, bytes) else (e.stdout or ""),
            stderr=f"Command timed out after {e.timeout}s",
            returncode=-1,
        )
    except FileNotFoundError:
        return RunResult(stdout="", stderr=f"{cmd[0]}: command not found", returncode=127)
    return RunResult(
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        returncode=result.returncode,
    )
