"""Remote client factory"""

from pathlib import Path
from typing import Any, Dict, Optional, Type, Union

from .base import RemoteClient
from .cloudshell import CloudShellClient
from .filesystem import FilesystemRemote
from ..constants import RemoteType
from ..models.settings import PublisherSettings


class RemoteClientFactory:
    """Factory for creating remote client instances"""

    # Registry of remote clients
    _clients: Dict[RemoteType, Type[RemoteClient]] = {
        RemoteType.CLOUDSHELL: CloudShellClient,
        RemoteType.FILESYSTEM: FilesystemRemote,
    }

    @classmethod
    def create_from_settings(cls,
                             settings: PublisherSettings,
                             project_root: Optional[Union[str, Path]] = None) -> RemoteClient:
        """Create a remote client from publish settings

        Args:
            settings: Publish settings
            project_root: Base for a relative filesystem remote path

        Returns:
            Remote client instance (not yet opened)

        Raises:
            ValueError: If the remote type is not supported
        """
        remote_type = settings.remote_type

        if remote_type not in cls._clients:
            raise ValueError(f"Unsupported remote type: {remote_type.value}")

        if remote_type == RemoteType.FILESYSTEM:
            path = Path(settings.server_root_address)
            if project_root is not None and not path.is_absolute():
                path = Path(project_root) / path
            config = {"path": str(path)}

        else:
            config = {
                "host": settings.server_root_address,
                "port": settings.port,
                "username": settings.username,
                "password": settings.password,
                "domain": settings.domain,
            }

        return cls._clients[remote_type](config)

    @classmethod
    def create_from_dict(cls, remote_type: str, config: Dict[str, Any]) -> RemoteClient:
        """Create a remote client from type and configuration dict

        Raises:
            ValueError: If the remote type is not supported
        """
        try:
            type_enum = RemoteType(remote_type)
        except ValueError:
            raise ValueError(f"Invalid remote type: {remote_type}")

        if type_enum not in cls._clients:
            raise ValueError(f"Unsupported remote type: {remote_type}")

        return cls._clients[type_enum](config)

    @classmethod
    def register_client(cls, remote_type: RemoteType, client_class: Type[RemoteClient]):
        """Register a remote client class for a remote type"""
        cls._clients[remote_type] = client_class

    @classmethod
    def get_supported_types(cls) -> list:
        """Get list of supported remote type names"""
        return [rt.value for rt in cls._clients.keys()]
