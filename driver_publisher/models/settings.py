"""Publish settings models"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Any, Tuple

from ..constants import DEFAULT_PORT, DEFAULT_DOMAIN, RemoteType


@dataclass(frozen=True)
class FileFilter:
    """Glob pattern with include/exclude polarity"""

    pattern: str
    include: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {"pattern": self.pattern, "include": self.include}


@dataclass(frozen=True)
class TargetSpec:
    """A project path published under a remote name"""

    path: str  # Relative to project root, file or directory
    target_name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {"path": self.path, "targetName": self.target_name}


@dataclass(frozen=True)
class PublisherSettings:
    """Validated publish settings, read-only once resolved"""

    server_root_address: str
    driver_unique_name: str
    port: int = DEFAULT_PORT
    username: str = ""
    password: str = ""
    domain: str = DEFAULT_DOMAIN
    source_root_folder: Optional[str] = None
    file_filters: Tuple[FileFilter, ...] = ()
    run_from_local_project: bool = False
    wait_for_debugger: bool = False
    drivers: Tuple[TargetSpec, ...] = ()
    scripts: Tuple[TargetSpec, ...] = ()
    remote_type: RemoteType = field(default=RemoteType.CLOUDSHELL)

    @property
    def has_explicit_targets(self) -> bool:
        """Check if separate driver/script path specs were configured"""
        return bool(self.drivers or self.scripts)

    @property
    def address(self) -> str:
        """Get host:port display string"""
        if self.remote_type == RemoteType.FILESYSTEM:
            return self.server_root_address
        return f"{self.server_root_address}:{self.port}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (password masked)"""
        data = {
            "serverRootAddress": self.server_root_address,
            "port": self.port,
            "username": self.username,
            "password": "***" if self.password else "",
            "domain": self.domain,
            "driverUniqueName": self.driver_unique_name,
            "runFromLocalProject": self.run_from_local_project,
            "waitForDebugger": self.wait_for_debugger,
            "fileFilters": [f.to_dict() for f in self.file_filters],
            "remoteType": self.remote_type.value,
        }

        if self.source_root_folder:
            data["sourceRootFolder"] = self.source_root_folder
        if self.drivers:
            data["drivers"] = [d.to_dict() for d in self.drivers]
        if self.scripts:
            data["scripts"] = [s.to_dict() for s in self.scripts]

        return data
