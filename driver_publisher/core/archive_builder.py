"""Zip archive creation from manifests"""

import logging
import os
import shutil
import stat
import tempfile
import zipfile
from pathlib import Path
from typing import BinaryIO, Dict, Mapping, Optional, Union
from xml.sax.saxutils import escape

from ..api.exceptions import ArchiveIOError
from ..constants import (
    BOOLEAN_FALSE,
    BOOLEAN_TRUE,
    DEBUG_SETTINGS_FILE_NAME,
    DEBUG_SETTINGS_TEMPLATE,
    DEFAULT_CHUNK_SIZE,
    ZIP_ENTRY_MODE,
    ZIP_ENTRY_TIMESTAMP,
)
from ..models.manifest import ArchiveManifest, ArchiveHandle, FileSource
from ..models.settings import PublisherSettings
from ..utils.file_utils import calculate_file_checksum, safe_remove

logger = logging.getLogger(__name__)

ExtraEntries = Mapping[str, Union[str, bytes]]


def make_debug_descriptor(load_from: Union[str, Path], wait_for_debugger: bool) -> bytes:
    """Render the debug descriptor read by the deployed driver runtime"""
    content = DEBUG_SETTINGS_TEMPLATE.format(
        load_from=escape(str(load_from)),
        wait_for_debugger=BOOLEAN_TRUE if wait_for_debugger else BOOLEAN_FALSE
    )
    return content.encode("utf-8")


def debug_entries(settings: PublisherSettings, project_root: Union[str, Path]) -> Dict[str, bytes]:
    """Synthetic entries to inject for the given settings"""
    if not settings.run_from_local_project:
        return {}

    return {
        DEBUG_SETTINGS_FILE_NAME: make_debug_descriptor(
            Path(project_root).absolute(),
            settings.wait_for_debugger
        )
    }


def _write_zip(fileobj: BinaryIO, manifest: ArchiveManifest) -> None:
    """Write every manifest entry, sorted by name, into a zip stream"""
    with zipfile.ZipFile(fileobj, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name in sorted(manifest.names):
            source = manifest.get(name)

            info = zipfile.ZipInfo(name, date_time=ZIP_ENTRY_TIMESTAMP)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = (stat.S_IFREG | ZIP_ENTRY_MODE) << 16

            if isinstance(source, FileSource):
                info.file_size = source.path.stat().st_size
                with open(source.path, "rb") as src, archive.open(info, "w") as dst:
                    shutil.copyfileobj(src, dst, DEFAULT_CHUNK_SIZE)
            else:
                archive.writestr(info, source.read())


def build(manifest: ArchiveManifest,
          extra_entries: Optional[ExtraEntries],
          destination: Union[str, Path]) -> ArchiveHandle:
    """
    Build a zip archive from a manifest plus synthetic entries

    Filesystem entries are applied first and synthetic entries overwrite
    any entry with the same name. The archive is written to a temporary
    file beside ``destination`` and renamed into place only when complete.

    Args:
        manifest: Analyzed entries
        extra_entries: Synthetic entries (name -> content)
        destination: Archive output path

    Returns:
        ArchiveHandle for the completed archive

    Raises:
        ArchiveIOError: If any read or write fails; no archive is left at
            ``destination`` in that case
    """
    destination = Path(destination)
    merged = manifest.merged(extra_entries or {})
    temp_path = None

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_name = tempfile.mkstemp(
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".tmp"
        )
        temp_path = Path(temp_name)

        with os.fdopen(fd, "wb") as f:
            _write_zip(f, merged)

        os.replace(temp_path, destination)
        temp_path = None

    except OSError as e:
        _discard(temp_path, destination)
        raise ArchiveIOError(f"Failed to build archive {destination}: {e}", str(destination)) from e

    except BaseException:
        _discard(temp_path, destination)
        raise

    handle = ArchiveHandle(
        path=destination,
        size=destination.stat().st_size,
        entry_count=len(merged),
        checksum=calculate_file_checksum(destination)
    )

    logger.info(f"Archive created: {destination} ({handle.entry_count} entries)")
    return handle


def _discard(temp_path: Optional[Path], destination: Path) -> None:
    # A stale archive from an earlier run must not pass for this build's output
    if temp_path is not None:
        safe_remove(temp_path)
    safe_remove(destination)
