"""Bulk-archive and per-entry updaters

Both variants share one contract: open session in, entries applied on the
remote out, ``RemoteError`` subclasses on failure. The caller picks one with
``select_updater_kind`` and branches on the result.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..api.exceptions import AuthError, RemoteUpdateError
from ..constants import EntryKind, UpdaterKind
from ..models.manifest import ArchiveHandle
from ..models.settings import PublisherSettings
from ..remote.base import RemoteClient

logger = logging.getLogger(__name__)

Entry = Tuple[str, Union[Path, bytes]]


def select_updater_kind(settings: PublisherSettings) -> UpdaterKind:
    """Per-entry when separate driver/script paths are configured"""
    if settings.has_explicit_targets:
        return UpdaterKind.PER_ENTRY
    return UpdaterKind.BULK_ARCHIVE


async def update_archive(session: RemoteClient, name: str, handle: ArchiveHandle) -> None:
    """
    Send a whole driver archive in one call

    Args:
        session: Open remote session
        name: Driver unique name
        handle: Built archive

    Raises:
        RemoteUpdateError: If the remote rejects the archive
    """
    logger.info(f"Updating driver {name} ({handle.entry_count} entries)")
    await session.update_driver(name, handle.path)


async def update_entries(session: RemoteClient,
                         kind: EntryKind,
                         entries: Iterable[Entry],
                         applied: Optional[List[str]] = None) -> List[str]:
    """
    Send entries one by one, in order

    Entries accepted before a failure stay applied on the remote.

    Args:
        session: Open remote session
        kind: Driver archives or script files
        entries: (name, content) pairs
        applied: Names already applied earlier in this publish; extended in place

    Returns:
        Names of all applied entries

    Raises:
        RemoteUpdateError: Names the failing entry and carries the applied ones
        AuthError: Same, when the server rejects the session part way through
    """
    applied = applied if applied is not None else []

    for name, content in entries:
        if kind == EntryKind.SCRIPT and isinstance(content, Path):
            content = content.read_bytes()

        logger.info(f"Updating {kind.value} {name}")
        try:
            await session.update_entry(kind, name, content)
        except RemoteUpdateError as e:
            raise RemoteUpdateError(e.target, e.reason, applied) from e
        except AuthError as e:
            raise AuthError(e.reason, e.target or name, applied) from e

        applied.append(name)

    return applied
