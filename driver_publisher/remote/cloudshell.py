# driver_publisher/remote/cloudshell.py
"""CloudShell REST remote client implementation"""

import socket
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union
from urllib.parse import urlparse

import requests

from .base import RemoteClient, ArchiveContent
from ..api.exceptions import AuthError, RemoteUpdateError, UnknownHostError
from ..constants import (
    API_LOGIN,
    API_UPDATE_DRIVER,
    API_UPDATE_SCRIPT,
    ARCHIVE_FILE_PATTERN,
    DEFAULT_DOMAIN,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
)


class CloudShellClient(RemoteClient):
    """HTTP client for the CloudShell quali server API"""

    def __init__(self, config: Dict[str, Any] = None,
                 session_factory: Callable[[], requests.Session] = requests.Session):
        """
        Initialize CloudShell client

        Args:
            config: Configuration including:
                - host: Server address, optionally with a scheme
                - port: Server port
                - username, password, domain: Credentials
                - timeout: Request timeout in seconds (optional)
            session_factory: Creates the HTTP session
        """
        super().__init__(config)
        self._session_factory = session_factory
        self._session: Optional[requests.Session] = None

        address = self.config.get('host', '')
        if '://' not in address:
            address = f"http://{address}"
        parsed = urlparse(address)

        self.scheme = parsed.scheme
        self.host = parsed.hostname or ''
        self.port = parsed.port or int(self.config.get('port') or DEFAULT_PORT)
        self.username = self.config.get('username', '')
        self.password = self.config.get('password', '')
        self.domain = self.config.get('domain') or DEFAULT_DOMAIN
        self.timeout = self.config.get('timeout', DEFAULT_REQUEST_TIMEOUT)

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def _do_open(self) -> None:
        """Resolve the host, then log in and keep the token on the session"""
        await self._run_blocking(self._resolve_host)

        self._session = self._session_factory()
        try:
            token = await self._run_blocking(self._login)
        except BaseException:
            self._session.close()
            self._session = None
            raise

        self._session.headers['Authorization'] = f"Basic {token}"
        self.logger.debug(f"Logged in to {self.base_url} as {self.username}@{self.domain}")

    def _resolve_host(self) -> None:
        if not self.host:
            raise UnknownHostError(self.config.get('host', ''))

        try:
            socket.getaddrinfo(self.host, self.port)
        except socket.gaierror as e:
            self.logger.debug(f"Failed to resolve {self.host}: {e}")
            raise UnknownHostError(self.host)

    def _login(self) -> str:
        payload = {
            'username': self.username,
            'password': self.password,
            'domain': self.domain,
        }

        try:
            response = self._session.put(self._url(API_LOGIN), json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RemoteUpdateError(self.base_url, f"connection failed: {e}")

        if not response.ok:
            raise AuthError(
                f"Login rejected for '{self.username}' in domain '{self.domain}' "
                f"(HTTP {response.status_code})"
            )

        return response.text.strip().strip('"')

    async def update_driver(self, name: str, archive: ArchiveContent) -> None:
        """Upload a whole driver archive"""
        self._ensure_open()
        data = archive.read_bytes() if isinstance(archive, Path) else archive
        await self._run_blocking(
            self._put_file,
            API_UPDATE_DRIVER.format(name=name),
            name,
            ARCHIVE_FILE_PATTERN.format(name=name),
            data
        )

    async def update_script(self, name: str, data: bytes) -> None:
        """Upload a single script file"""
        self._ensure_open()
        await self._run_blocking(
            self._put_file,
            API_UPDATE_SCRIPT.format(name=name),
            name,
            Path(name).name,
            data
        )

    def _put_file(self, path: str, name: str, file_name: str, data: Union[bytes, str]) -> None:
        try:
            response = self._session.put(
                self._url(path),
                files={'file': (file_name, data)},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise RemoteUpdateError(name, f"connection failed: {e}")

        if response.status_code in (401, 403):
            raise AuthError(f"Session rejected (HTTP {response.status_code})", name)

        if not response.ok:
            detail = response.text.strip()[:200]
            raise RemoteUpdateError(name, f"HTTP {response.status_code}: {detail}")

        self.logger.debug(f"Updated {name} ({len(data)} bytes)")

    async def _do_close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
