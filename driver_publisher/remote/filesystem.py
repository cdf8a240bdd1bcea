# driver_publisher/remote/filesystem.py
"""Filesystem remote client implementation"""

import os
import tempfile
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional

import aiofiles
import aiofiles.os

from .base import RemoteClient, ArchiveContent
from ..api.exceptions import RemoteUpdateError, UnknownHostError
from ..constants import (
    ARCHIVE_FILE_PATTERN,
    DEFAULT_CHUNK_SIZE,
    REMOTE_DRIVERS_DIR,
    REMOTE_SCRIPTS_DIR,
    EntryKind,
)


class FilesystemRemote(RemoteClient):
    """A local directory standing in for the server

    Drivers are stored as ``drivers/<name>.zip`` and scripts as
    ``scripts/<name>``. Every write lands atomically.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize filesystem remote

        Args:
            config: Configuration including:
                - path: Server directory (must exist)
        """
        super().__init__(config)
        self.base_path = Path(os.path.expandvars(str(self.config.get('path', '')))).expanduser()

    async def _do_open(self) -> None:
        if not str(self.config.get('path', '')).strip() or not self.base_path.is_dir():
            raise UnknownHostError(str(self.base_path))

        self.logger.debug(f"Using directory remote at {self.base_path}")

    def _entry_path(self, kind: EntryKind, name: str) -> Path:
        parts = PurePosixPath(name.replace('\\', '/')).parts
        if not parts or '..' in parts or parts[0] == '/':
            raise RemoteUpdateError(name, "invalid entry name")

        if kind == EntryKind.DRIVER:
            return self.base_path / REMOTE_DRIVERS_DIR / ARCHIVE_FILE_PATTERN.format(name=name)
        return self.base_path.joinpath(REMOTE_SCRIPTS_DIR, *parts)

    async def update_driver(self, name: str, archive: ArchiveContent) -> None:
        """Store a driver archive"""
        self._ensure_open()
        await self._write(self._entry_path(EntryKind.DRIVER, name), name, archive)

    async def update_script(self, name: str, data: bytes) -> None:
        """Store a single script file"""
        self._ensure_open()
        await self._write(self._entry_path(EntryKind.SCRIPT, name), name, data)

    async def _write(self, target: Path, name: str, content: ArchiveContent) -> None:
        """Write to a temporary file beside target, then rename over it"""
        temp_path = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
            os.close(fd)
            temp_path = Path(temp_name)

            async with aiofiles.open(temp_path, 'wb') as dst:
                if isinstance(content, Path):
                    async with aiofiles.open(content, 'rb') as src:
                        while True:
                            chunk = await src.read(DEFAULT_CHUNK_SIZE)
                            if not chunk:
                                break
                            await dst.write(chunk)
                else:
                    await dst.write(content)

            await aiofiles.os.replace(temp_path, target)
            temp_path = None

        except OSError as e:
            raise RemoteUpdateError(name, str(e))

        finally:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()

        self.logger.debug(f"Stored {name} at {target}")

    async def get_entry(self, kind: EntryKind, name: str) -> Optional[bytes]:
        """Read back a stored driver archive or script"""
        path = self._entry_path(kind, name)
        if not path.is_file():
            return None

        async with aiofiles.open(path, 'rb') as f:
            return await f.read()

    async def list_entries(self, kind: EntryKind) -> list:
        """List stored entry names of one kind"""
        if kind == EntryKind.DRIVER:
            root = self.base_path / REMOTE_DRIVERS_DIR
            return sorted(p.stem for p in root.glob('*.zip')) if root.is_dir() else []

        root = self.base_path / REMOTE_SCRIPTS_DIR
        if not root.is_dir():
            return []
        return sorted(
            p.relative_to(root).as_posix()
            for p in root.rglob('*')
            if p.is_file() and not p.name.startswith('.')
        )
