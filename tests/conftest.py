from pathlib import Path

import pytest

from fsgen.pipeline import load_config
from fsgen.schema import FilesystemEntry

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def config_path() -> Path:
    return FIXTURES / "filesystems.json"


@pytest.fixture
def config(config_path):
    return load_config(config_path)


@pytest.fixture
def make_entry():
    """Build a FilesystemEntry with the mount point doubling as its key."""
    def _make(mount_point="/data", **kwargs):
        name = kwargs.pop("name", mount_point)
        return FilesystemEntry(name=name, mount_point=mount_point, **kwargs)
    return _make
