"""
Error taxonomy.

ConfigError is raised while building a generation and aborts it entirely.
DeviceMissing and FormatFailed are raised later, by the format action a
generated unit runs on the target host.
"""


class FsgenError(Exception):
    """Base class for every error fsgen raises on purpose."""


class ConfigError(FsgenError):
    """Malformed or contradictory filesystem configuration."""


class DeviceMissing(FsgenError):
    """The device node a format unit targets does not exist."""

    def __init__(self, device: str):
        super().__init__(f"device {device} does not exist")
        self.device = device


class FormatFailed(FsgenError):
    """mkfs returned a non-zero status."""

    def __init__(self, device: str, fs_type: str, returncode: int, stderr: str = ""):
        msg = f"mkfs.{fs_type} {device} failed with status {returncode}"
        if stderr.strip():
            msg += f": {stderr.strip()}"
        super().__init__(msg)
        self.device = device
        self.fs_type = fs_type
        self.returncode = returncode


class ProbeFailed(FsgenError):
    """blkid could not tell whether the device carries a filesystem."""

    def __init__(self, device: str, returncode: int, stderr: str = ""):
        msg = f"blkid probe of {device} failed with status {returncode}"
        if stderr.strip():
            msg += f": {stderr.strip()}"
        super().__init__(msg)
        self.device = device
        self.returncode = returncode
