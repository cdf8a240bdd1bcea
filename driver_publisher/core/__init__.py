"""Core functionality for driver-publisher"""

from .path_resolver import PathResolver, find_project_root, find_settings_file
from .settings_resolver import resolve as resolve_settings
from .file_filter import matches
from .archive_analyzer import analyze, analyze_files, analyze_target
from .archive_builder import build, debug_entries, make_debug_descriptor
from .updaters import select_updater_kind, update_archive, update_entries

__all__ = [
    "PathResolver",
    "find_project_root",
    "find_settings_file",
    "resolve_settings",
    "matches",
    "analyze",
    "analyze_files",
    "analyze_target",
    "build",
    "debug_entries",
    "make_debug_descriptor",
    "select_updater_kind",
    "update_archive",
    "update_entries",
]
