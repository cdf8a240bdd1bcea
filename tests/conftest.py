"""Shared fixtures for driver-publisher tests."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from driver_publisher.api.exceptions import RemoteUpdateError
from driver_publisher.constants import EntryKind
from driver_publisher.remote.base import RemoteClient


class FakeRemote(RemoteClient):
    """In-memory remote that records every update."""

    def __init__(self, fail_on: Optional[str] = None, open_error: Optional[Exception] = None):
        super().__init__({})
        self.fail_on = fail_on
        self.open_error = open_error
        self.store: Dict[Tuple[EntryKind, str], bytes] = {}
        self.calls: List[Tuple[EntryKind, str]] = []
        self.open_count = 0
        self.closed = False

    async def _do_open(self) -> None:
        self.open_count += 1
        if self.open_error is not None:
            raise self.open_error

    async def update_driver(self, name, archive) -> None:
        self._ensure_open()
        data = archive.read_bytes() if isinstance(archive, Path) else archive
        self._record(EntryKind.DRIVER, name, data)

    async def update_script(self, name, data) -> None:
        self._ensure_open()
        self._record(EntryKind.SCRIPT, name, data)

    def _record(self, kind: EntryKind, name: str, data: bytes) -> None:
        self.calls.append((kind, name))
        if name == self.fail_on:
            raise RemoteUpdateError(name, "rejected by server")
        self.store[(kind, name)] = data

    async def get_entry(self, kind, name):
        return self.store.get((kind, name))

    async def _do_close(self) -> None:
        self.closed = True


def write_files(root: Path, files: Dict[str, str]) -> None:
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def fake_remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A driver project with sources, tests and a readme."""
    root = tmp_path / "proj"
    write_files(root, {
        "driver.py": "class Driver: pass\n",
        "helpers/util.py": "def util(): return 1\n",
        "helpers/test_util.py": "def test_util(): pass\n",
        "readme.md": "# Driver\n",
    })
    return root


@pytest.fixture
def make_remote():
    """Factory for FakeRemote instances with custom failure behavior."""
    return FakeRemote
