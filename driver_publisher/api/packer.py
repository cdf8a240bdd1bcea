"""Packer API for building driver archives without publishing"""

from pathlib import Path
from typing import Optional, Union

from ..core.path_resolver import PathResolver, find_project_root
from ..models.manifest import ArchiveHandle
from ..models.settings import PublisherSettings
from ..services import ConfigService, PackageService


class Packer:
    """Builds the bulk driver archive into the project's deployment folder"""

    def __init__(self,
                 project_root: Optional[Union[str, Path]] = None,
                 config_path: Optional[Union[str, Path]] = None):
        root = project_root or find_project_root() or Path.cwd()
        self.path_resolver = PathResolver(root)
        self.config_service = ConfigService(
            self.path_resolver.project_root,
            Path(config_path) if config_path else None
        )
        self.package_service = PackageService(self.path_resolver)

    def pack(self, settings: Optional[PublisherSettings] = None) -> ArchiveHandle:
        """
        Build ``deployment/<driverUniqueName>.zip``

        Args:
            settings: Resolved settings (loaded from the project when omitted)

        Returns:
            ArchiveHandle of the written archive

        Raises:
            ConfigError: If settings cannot be loaded
            FilesystemError: If the source root is invalid
            NothingToPublishError: If the filters leave no entries
            ArchiveIOError: If the archive cannot be written
        """
        settings = settings or self.config_service.load_settings()
        return self.package_service.build_driver_archive(settings)


def pack(project_root: Optional[Union[str, Path]] = None, **kwargs) -> ArchiveHandle:
    """Convenience function for building a project's driver archive"""
    return Packer(project_root, **kwargs).pack()
