# driver_publisher/remote/base.py
"""Remote client abstract base class"""

import asyncio
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from ..constants import EntryKind

ArchiveContent = Union[Path, bytes]


class RemoteClient(ABC):
    """Authenticated session against the resource-management server

    A client is opened once per publish invocation and closed on every exit
    path; use it as an async context manager. Blocking calls run on the
    client's own executor, which is abandoned without waiting on close so
    a cancelled publish never blocks on in-flight network I/O.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize remote client

        Args:
            config: Client-specific configuration
        """
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)
        self._opened = False
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def is_open(self) -> bool:
        return self._opened

    async def open(self) -> None:
        """Open the session (resolve host and authenticate)

        Raises:
            UnknownHostError: If the server address cannot be resolved
            AuthError: If the credentials are rejected
        """
        if self._opened:
            return

        try:
            await self._do_open()
        except BaseException:
            self._shutdown_executor()
            raise

        self._opened = True

    @abstractmethod
    async def _do_open(self) -> None:
        """Actual session setup to be implemented by subclasses"""
        pass

    @abstractmethod
    async def update_driver(self, name: str, archive: ArchiveContent) -> None:
        """
        Replace a driver's payload with a whole archive

        Args:
            name: Driver unique name
            archive: Archive path or bytes

        Raises:
            RemoteUpdateError: If the remote rejects the archive
        """
        pass

    @abstractmethod
    async def update_script(self, name: str, data: bytes) -> None:
        """
        Replace a single script file

        Args:
            name: Script name
            data: File content

        Raises:
            RemoteUpdateError: If the remote rejects the file
        """
        pass

    async def update_entry(self, kind: EntryKind, name: str, data: bytes) -> None:
        """Update one named entry of the given kind"""
        if kind == EntryKind.DRIVER:
            await self.update_driver(name, data)
        else:
            await self.update_script(name, data)

    async def get_entry(self, kind: EntryKind, name: str) -> Optional[bytes]:
        """
        Fetch the current content of an entry

        Returns:
            Content or None if the entry does not exist
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support queries")

    async def close(self) -> None:
        """Close the session"""
        if not self._opened:
            return

        try:
            await self._do_close()
        finally:
            self._opened = False
            self._shutdown_executor()

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def _run_blocking(self, func: Callable[..., Any], *args) -> Any:
        """Run a blocking call on the client's executor"""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix=self.__class__.__name__
            )

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, func, *args)

    def _shutdown_executor(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def _ensure_open(self) -> None:
        if not self._opened:
            raise RuntimeError(f"{self.__class__.__name__} session is not open")

    async def __aenter__(self):
        """Async context manager entry"""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
