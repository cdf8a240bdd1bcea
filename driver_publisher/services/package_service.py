# driver_publisher/services/package_service.py
"""Package service implementation"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

from ..api.exceptions import ConfigError, NothingToPublishError
from ..constants import DEBUG_SETTINGS_FILE_NAME
from ..core.archive_analyzer import analyze, analyze_target
from ..core.archive_builder import build, debug_entries
from ..core.path_resolver import PathResolver
from ..models.manifest import ArchiveHandle, ArchiveManifest
from ..models.settings import PublisherSettings, TargetSpec

Entry = Tuple[str, Union[Path, bytes]]


def _check_unique(kind: str, names: List[str]) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise ConfigError(f"Two {kind} entries would both be published as '{name}'")
        seen.add(name)


@dataclass
class EntryPlan:
    """Built driver archives and script files ready for per-entry upload"""
    drivers: List[Entry] = field(default_factory=list)
    scripts: List[Entry] = field(default_factory=list)
    archives: List[ArchiveHandle] = field(default_factory=list)

    @property
    def entry_names(self) -> List[str]:
        return [name for name, _ in self.drivers + self.scripts]


class PackageService:
    """Packaging service implementation"""

    def __init__(self, path_resolver: PathResolver):
        """
        Initialize package service

        Args:
            path_resolver: Path resolver for the project
        """
        self.path_resolver = path_resolver
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def project_root(self) -> Path:
        return self.path_resolver.project_root

    def _ignored_dirs(self) -> List[Path]:
        # Earlier build output must never be packaged again
        return [self.path_resolver.get_deployment_dir()]

    def _strip_reserved(self, manifest: ArchiveManifest) -> ArchiveManifest:
        if manifest.remove(DEBUG_SETTINGS_FILE_NAME) is not None:
            self.logger.warning(f"Ignoring project file {DEBUG_SETTINGS_FILE_NAME}, the name is reserved")
        return manifest

    def analyze_source(self, settings: PublisherSettings) -> ArchiveManifest:
        """
        Analyze the driver source root

        Raises:
            FilesystemError: If sourceRootFolder is missing or not a directory
        """
        source_root = self.path_resolver.get_source_root(settings.source_root_folder)
        manifest = analyze(source_root, settings.file_filters, ignore=self._ignored_dirs())
        return self._strip_reserved(manifest)

    def analyze_target(self, spec: TargetSpec, settings: PublisherSettings) -> ArchiveManifest:
        """Analyze one configured driver or script path"""
        manifest = analyze_target(
            spec,
            settings.file_filters,
            self.path_resolver,
            ignore=self._ignored_dirs()
        )
        return self._strip_reserved(manifest)

    def build_driver_archive(self, settings: PublisherSettings) -> ArchiveHandle:
        """
        Build the single driver archive used by the bulk updater

        Written to ``deployment/<driverUniqueName>.zip``.

        Raises:
            FilesystemError: If the source root is invalid
            NothingToPublishError: If the filters leave no entries
            ArchiveIOError: If the archive cannot be written
        """
        manifest = self.analyze_source(settings)
        if manifest.is_empty:
            raise NothingToPublishError()

        destination = self.path_resolver.get_archive_path(settings.driver_unique_name)
        return build(manifest, debug_entries(settings, self.project_root), destination)

    def plan_entries(self, settings: PublisherSettings) -> EntryPlan:
        """
        Analyze every driver and script path and build the driver archives

        A script path naming a file becomes one entry called by its target
        name; a script directory contributes one entry per included file,
        named by its path relative to that directory. Two entries of the
        same kind may not share a name.

        Raises:
            FilesystemError: If a configured path is missing
            ConfigError: If two entries of one kind share a name
            NothingToPublishError: If no driver and no script has any entry
            ArchiveIOError: If a driver archive cannot be written
        """
        driver_manifests = [(spec, self.analyze_target(spec, settings)) for spec in settings.drivers]

        plan = EntryPlan()
        for spec in settings.scripts:
            plan.scripts.extend(self._script_entries(spec, settings))

        if not plan.scripts and all(m.is_empty for _, m in driver_manifests):
            raise NothingToPublishError()

        _check_unique("driver", [spec.target_name for spec, _ in driver_manifests])
        _check_unique("script", [name for name, _ in plan.scripts])

        extras = debug_entries(settings, self.project_root)
        for spec, manifest in driver_manifests:
            if manifest.is_empty:
                self.logger.warning(f"Driver '{spec.target_name}' has no files after filtering, skipped")
                continue

            handle = build(manifest, extras, self.path_resolver.get_archive_path(spec.target_name))
            plan.archives.append(handle)
            plan.drivers.append((spec.target_name, handle.path))

        return plan

    def _script_entries(self, spec: TargetSpec, settings: PublisherSettings) -> List[Entry]:
        path = self.path_resolver.resolve_existing(spec.path)
        manifest = self.analyze_target(spec, settings)

        if path.is_dir():
            return [(name, source.path) for name, source in manifest.items()]

        if manifest.is_empty:
            return []
        return [(spec.target_name, path)]
