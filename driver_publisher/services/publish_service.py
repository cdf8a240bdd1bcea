# driver_publisher/services/publish_service.py
"""Publish service implementation"""

import asyncio
import logging
from typing import Callable, Optional

from .package_service import PackageService
from ..api.exceptions import DriverPublisherError, PublishCancelledError
from ..constants import EntryKind, UpdaterKind
from ..core.updaters import select_updater_kind, update_archive, update_entries
from ..models.result import PublishResult
from ..models.settings import PublisherSettings
from ..remote.base import RemoteClient
from ..remote.factory import RemoteClientFactory

RemoteFactory = Callable[[PublisherSettings], RemoteClient]


class PublishService:
    """Runs the analyze, build and update pipeline for one publish call"""

    def __init__(self,
                 package_service: PackageService,
                 remote_factory: Optional[RemoteFactory] = None):
        """
        Initialize publish service

        Args:
            package_service: Package service for the project
            remote_factory: Creates a fresh remote client per publish
        """
        self.package_service = package_service
        self.remote_factory = remote_factory or self._default_remote_factory
        self.logger = logging.getLogger(self.__class__.__name__)

    def _default_remote_factory(self, settings: PublisherSettings) -> RemoteClient:
        return RemoteClientFactory.create_from_settings(settings, self.package_service.project_root)

    async def publish(self,
                      settings: PublisherSettings,
                      kind: Optional[UpdaterKind] = None) -> PublishResult:
        """
        Publish with the given or the auto-selected updater

        Args:
            settings: Resolved publish settings
            kind: Updater kind, selected from settings when omitted

        Returns:
            PublishResult
        """
        kind = kind or select_updater_kind(settings)

        if kind == UpdaterKind.BULK_ARCHIVE:
            return await self.publish_archive(settings)
        return await self.publish_entries(settings)

    async def publish_archive(self, settings: PublisherSettings) -> PublishResult:
        """Build one driver archive and send it in a single update"""
        result = PublishResult(updater_kind=UpdaterKind.BULK_ARCHIVE, target=settings.address)

        async def run():
            handle = self.package_service.build_driver_archive(settings)
            result.archive = handle

            async with self.remote_factory(settings) as session:
                await update_archive(session, settings.driver_unique_name, handle)

            result.applied_entries = [settings.driver_unique_name]

        return await self._run(run, result)

    async def publish_entries(self, settings: PublisherSettings) -> PublishResult:
        """Send each driver archive and script file as its own update"""
        result = PublishResult(updater_kind=UpdaterKind.PER_ENTRY, target=settings.address)

        async def run():
            plan = self.package_service.plan_entries(settings)
            self.logger.info(f"Publishing {len(plan.entry_names)} entries to {settings.address}")
            applied = result.applied_entries

            async with self.remote_factory(settings) as session:
                await update_entries(session, EntryKind.DRIVER, plan.drivers, applied)
                await update_entries(session, EntryKind.SCRIPT, plan.scripts, applied)

        return await self._run(run, result)

    async def _run(self, pipeline, result: PublishResult) -> PublishResult:
        try:
            await pipeline()

        except asyncio.CancelledError:
            self.logger.warning("Publish cancelled")
            return result.fail(PublishCancelledError())

        except DriverPublisherError as e:
            self.logger.error(f"Publish failed: {e}")
            return result.fail(e)

        except Exception as e:
            self.logger.exception(f"Unexpected error during publish: {e}")
            return result.fail(e)

        self.logger.info(f"Published {len(result.applied_entries)} item(s) to {result.target}")
        return result.succeed()
