"""Publisher API for publishing operations"""

import concurrent.futures
from pathlib import Path
from typing import Callable, Optional, Union

from ..core.path_resolver import PathResolver, find_project_root
from ..constants import UpdaterKind
from ..models.result import PublishResult
from ..models.settings import PublisherSettings
from ..remote.base import RemoteClient
from ..services import ConfigService, PackageService, PublishService
from ..utils.async_utils import BackgroundTask, run_async
from .exceptions import DriverPublisherError, PublishCancelledError


class PublishTask:
    """Handle on a publish running off the caller's thread"""

    def __init__(self, background: BackgroundTask, updater_kind: Optional[UpdaterKind] = None):
        self._background = background
        self._updater_kind = updater_kind

    def cancel(self) -> None:
        """Cancel the publish; in-flight network calls are abandoned"""
        self._background.cancel()

    def done(self) -> bool:
        return self._background.done()

    def result(self, timeout: Optional[float] = None) -> PublishResult:
        """
        Wait for the publish outcome

        Raises:
            concurrent.futures.TimeoutError: If timeout expires first
        """
        try:
            return self._background.result(timeout)
        except concurrent.futures.CancelledError:
            # Cancelled before the pipeline got to run
            return PublishResult(updater_kind=self._updater_kind).fail(PublishCancelledError())

    def add_done_callback(self, callback: Callable[['PublishTask'], None]) -> None:
        """Invoke callback with this task once finished"""
        self._background.add_done_callback(lambda _: callback(self))


class Publisher:
    """Publisher class for publishing drivers and scripts"""

    def __init__(self,
                 project_root: Optional[Union[str, Path]] = None,
                 config_path: Optional[Union[str, Path]] = None,
                 remote_factory: Optional[Callable[[PublisherSettings], RemoteClient]] = None):
        """
        Initialize publisher

        Args:
            project_root: Project directory (searched upwards from cwd when omitted)
            config_path: Explicit settings file
            remote_factory: Creates the remote client for each publish
        """
        root = project_root or find_project_root() or Path.cwd()
        self.path_resolver = PathResolver(root)
        self.config_service = ConfigService(
            self.path_resolver.project_root,
            Path(config_path) if config_path else None
        )
        self.package_service = PackageService(self.path_resolver)
        self.publish_service = PublishService(self.package_service, remote_factory)

    @property
    def project_root(self) -> Path:
        return self.path_resolver.project_root

    def load_settings(self) -> PublisherSettings:
        """
        Load settings from the project's settings file

        Raises:
            ConfigError: If the file is missing or malformed
        """
        return self.config_service.load_settings()

    def publish(self,
                settings: Optional[PublisherSettings] = None,
                kind: Optional[UpdaterKind] = None) -> PublishResult:
        """
        Publish, picking the updater from settings unless kind is given

        Args:
            settings: Resolved settings (loaded from the project when omitted)
            kind: Force the bulk or per-entry updater

        Returns:
            PublishResult: success or a classified failure
        """
        return run_async(self._publish_async(settings, kind))

    def publish_archive(self, settings: Optional[PublisherSettings] = None) -> PublishResult:
        """Publish the whole driver archive in one update"""
        return self.publish(settings, UpdaterKind.BULK_ARCHIVE)

    def publish_entries(self, settings: Optional[PublisherSettings] = None) -> PublishResult:
        """Publish each configured driver and script independently"""
        return self.publish(settings, UpdaterKind.PER_ENTRY)

    def start(self,
              settings: Optional[PublisherSettings] = None,
              kind: Optional[UpdaterKind] = None) -> PublishTask:
        """
        Start a publish on a worker thread

        Returns:
            PublishTask that can be cancelled or waited on
        """
        background = BackgroundTask(
            lambda: self._publish_async(settings, kind),
            name=f"publish-{self.project_root.name}"
        )
        return PublishTask(background.start(), kind)

    async def _publish_async(self,
                             settings: Optional[PublisherSettings],
                             kind: Optional[UpdaterKind]) -> PublishResult:
        try:
            settings = settings or self.load_settings()
        except DriverPublisherError as e:
            return PublishResult(updater_kind=kind).fail(e)

        return await self.publish_service.publish(settings, kind)


def publish(project_root: Optional[Union[str, Path]] = None,
            kind: Optional[UpdaterKind] = None,
            **kwargs) -> PublishResult:
    """
    Convenience function for publishing a project

    Args:
        project_root: Project directory
        kind: Force the bulk or per-entry updater
        **kwargs: Passed to Publisher

    Returns:
        PublishResult
    """
    publisher = Publisher(project_root, **kwargs)
    return publisher.publish(kind=kind)
