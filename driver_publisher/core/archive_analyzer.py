"""Directory analysis producing archive manifests"""

import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Sequence, Set, Union

from .file_filter import matches, normalize_path
from .path_resolver import PathResolver
from ..api.exceptions import FilesystemError
from ..models.manifest import ArchiveManifest
from ..models.settings import FileFilter, TargetSpec

logger = logging.getLogger(__name__)


def _check_root(root_dir: Union[str, Path]) -> Path:
    root = Path(root_dir)
    if not root.exists():
        raise FilesystemError(f"Directory not found: {root}", str(root))
    if not root.is_dir():
        raise FilesystemError(f"Not a directory: {root}", str(root))
    return root.absolute()


def analyze(root_dir: Union[str, Path],
            filters: Sequence[FileFilter] = (),
            ignore: Optional[Iterable[Union[str, Path]]] = None) -> ArchiveManifest:
    """
    Walk a directory and map included files to archive entry names

    Directory symlinks are followed once; a directory whose real path was
    already visited is skipped, which prevents cycles. Entry names are the
    ``/``-joined paths relative to ``root_dir``. If two walks produce the
    same name the later one replaces the earlier mapping.

    Args:
        root_dir: Directory to analyze
        filters: Ordered include/exclude filters
        ignore: Absolute directories to skip entirely

    Returns:
        ArchiveManifest with file sources

    Raises:
        FilesystemError: If root_dir is missing or not a directory
    """
    root = _check_root(root_dir)
    ignored: Set[str] = {os.path.realpath(p) for p in (ignore or [])}

    manifest = ArchiveManifest()
    visited: Set[str] = set()
    pending = [(root, "")]

    while pending:
        directory, prefix = pending.pop()

        real_dir = os.path.realpath(directory)
        if real_dir in visited:
            logger.debug(f"Skipping already visited directory: {directory}")
            continue
        visited.add(real_dir)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise FilesystemError(f"Cannot read directory {directory}: {e}", str(directory))

        subdirs = []
        for entry in entries:
            rel_name = f"{prefix}{entry.name}"

            if entry.is_dir(follow_symlinks=True):
                if os.path.realpath(entry.path) in ignored:
                    continue
                subdirs.append((Path(entry.path), f"{rel_name}/"))

            elif entry.is_file(follow_symlinks=True):
                if matches(rel_name, filters):
                    manifest.add_file(rel_name, Path(entry.path).absolute())

        # Reversed so the stack pops subdirectories in name order
        pending.extend(reversed(subdirs))

    logger.debug(f"Analyzed {root}: {len(manifest)} entries")
    return manifest


def analyze_files(root_dir: Union[str, Path],
                  files: Iterable[Union[str, Path]],
                  filters: Sequence[FileFilter] = ()) -> ArchiveManifest:
    """
    Map an explicit list of files to archive entry names

    Args:
        root_dir: Directory the entry names are relative to
        files: File paths, absolute or relative to root_dir
        filters: Ordered include/exclude filters

    Returns:
        ArchiveManifest with file sources
    """
    root = _check_root(root_dir)
    manifest = ArchiveManifest()

    for file_path in files:
        path = Path(file_path)
        if not path.is_absolute():
            path = root / path

        if not path.is_file():
            raise FilesystemError(f"File not found: {path}", str(path))

        try:
            rel_name = normalize_path(os.path.relpath(path, root))
        except ValueError:
            rel_name = path.name
        if rel_name.startswith("../"):
            rel_name = path.name

        if matches(rel_name, filters):
            manifest.add_file(rel_name, path.absolute())

    return manifest


def analyze_target(spec: TargetSpec,
                   filters: Sequence[FileFilter],
                   path_resolver: PathResolver,
                   ignore: Optional[Iterable[Union[str, Path]]] = None) -> ArchiveManifest:
    """
    Analyze a configured driver/script path

    A directory is walked; a single file becomes one entry named after the
    file.

    Raises:
        FilesystemError: If the path does not exist under the project root
    """
    path = path_resolver.resolve_existing(spec.path)

    if path.is_dir():
        return analyze(path, filters, ignore=ignore)

    return analyze_files(path.parent, [path], filters)
