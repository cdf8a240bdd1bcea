"""Path resolution module for driver-publisher"""

import os
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import FilesystemError
from ..constants import (
    ARCHIVE_FILE_PATTERN,
    DEFAULT_DEPLOYMENT_DIR,
    DEPLOYMENT_SETTINGS_FILES,
    ENV_PROJECT_ROOT,
)


class PathResolver:
    """Resolves paths within a driver project"""

    def __init__(self, project_root: Union[str, Path]):
        """Initialize path resolver

        Args:
            project_root: Root directory of the project
        """
        self.project_root = Path(project_root).resolve()

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to project root

        Args:
            path: Path to resolve (can be relative or absolute)

        Returns:
            Resolved absolute path
        """
        path = Path(os.path.expanduser(os.path.expandvars(str(path))))

        if path.is_absolute():
            return path.resolve()

        return (self.project_root / path).resolve()

    def resolve_existing(self, path: Union[str, Path], directory: bool = False) -> Path:
        """Resolve a path that must exist under the project root

        Args:
            path: Path to resolve
            directory: Require a directory

        Returns:
            Resolved absolute path

        Raises:
            FilesystemError: If the path is missing, outside the project
                or not a directory when one is required
        """
        resolved = self.resolve(path)

        if not self.is_under_project(resolved):
            raise FilesystemError(
                f"Path '{path}' is outside project root {self.project_root}",
                str(resolved)
            )

        if not resolved.exists():
            raise FilesystemError(f"Path not found: {resolved}", str(resolved))

        if directory and not resolved.is_dir():
            raise FilesystemError(f"Not a directory: {resolved}", str(resolved))

        return resolved

    def get_source_root(self, source_root_folder: Optional[str] = None) -> Path:
        """Get the directory the driver archive is built from

        Args:
            source_root_folder: Optional subfolder of the project root

        Returns:
            Project root or the resolved subfolder
        """
        if not source_root_folder:
            return self.project_root

        return self.resolve_existing(source_root_folder, directory=True)

    def get_deployment_dir(self) -> Path:
        """Get deployment output directory path"""
        return self.project_root / DEFAULT_DEPLOYMENT_DIR

    def get_archive_path(self, name: str) -> Path:
        """Get output path for an archive

        Args:
            name: Driver or target name

        Returns:
            Path to the zip file

        Raises:
            FilesystemError: If the name would leave the deployment directory
        """
        deployment_dir = self.get_deployment_dir()
        path = deployment_dir / ARCHIVE_FILE_PATTERN.format(name=name)

        if path.parent.resolve() != deployment_dir.resolve():
            raise FilesystemError(f"Archive name escapes {deployment_dir}: {name}", str(path))
        return path

    def is_under_project(self, path: Union[str, Path]) -> bool:
        """Check if a path is under the project root"""
        path = Path(path).resolve()

        try:
            path.relative_to(self.project_root)
            return True
        except ValueError:
            return False


def find_settings_file(project_root: Union[str, Path]) -> Optional[Path]:
    """Find the deployment settings file in a project root"""
    root = Path(project_root)
    for name in DEPLOYMENT_SETTINGS_FILES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def find_project_root(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest directory holding a deployment settings file

    Args:
        start_path: Directory to start searching from (defaults to cwd)

    Returns:
        Project root or None if not found
    """
    env_root = os.environ.get(ENV_PROJECT_ROOT)
    if start_path is None and env_root:
        return Path(env_root).resolve()

    current = Path(start_path or Path.cwd()).resolve()

    for directory in [current] + list(current.parents):
        if find_settings_file(directory):
            return directory

    return None
