"""Tests for directory analysis."""

import os
from pathlib import Path

import pytest

from driver_publisher.api.exceptions import FilesystemError
from driver_publisher.core.archive_analyzer import analyze, analyze_files, analyze_target
from driver_publisher.core.path_resolver import PathResolver
from driver_publisher.models.manifest import FileSource
from driver_publisher.models.settings import FileFilter, TargetSpec


def test_entry_names_are_relative_and_slash_joined(project: Path) -> None:
    manifest = analyze(project)

    assert sorted(manifest.names) == [
        "driver.py",
        "helpers/test_util.py",
        "helpers/util.py",
        "readme.md",
    ]
    source = manifest.get("helpers/util.py")
    assert isinstance(source, FileSource)
    assert source.path == (project / "helpers" / "util.py").absolute()


def test_filters_are_applied(project: Path) -> None:
    filters = [FileFilter("**/*.py"), FileFilter("**/test_*.py", include=False)]
    manifest = analyze(project, filters)

    assert sorted(manifest.names) == ["driver.py", "helpers/util.py"]


def test_traversal_is_deterministic(project: Path) -> None:
    assert analyze(project).names == analyze(project).names


def test_ignored_directory_is_skipped(project: Path) -> None:
    (project / "deployment").mkdir()
    (project / "deployment" / "old.zip").write_bytes(b"zip")

    manifest = analyze(project, ignore=[project / "deployment"])

    assert "deployment/old.zip" not in manifest


def test_missing_root_is_filesystem_error(tmp_path: Path) -> None:
    with pytest.raises(FilesystemError):
        analyze(tmp_path / "nope")


def test_file_root_is_filesystem_error(project: Path) -> None:
    with pytest.raises(FilesystemError):
        analyze(project / "driver.py")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_symlink_cycle_terminates(project: Path) -> None:
    try:
        os.symlink(project, project / "helpers" / "loop", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks here")

    manifest = analyze(project)

    assert "helpers/util.py" in manifest
    assert not any(name.startswith("helpers/loop/helpers/loop") for name in manifest.names)


def test_analyze_files_uses_paths_relative_to_root(project: Path) -> None:
    manifest = analyze_files(project, ["helpers/util.py", project / "driver.py"])

    assert sorted(manifest.names) == ["driver.py", "helpers/util.py"]


def test_analyze_files_missing_file_is_filesystem_error(project: Path) -> None:
    with pytest.raises(FilesystemError):
        analyze_files(project, ["missing.py"])


def test_analyze_target_single_file(project: Path) -> None:
    manifest = analyze_target(TargetSpec("helpers/util.py", "util"), [], PathResolver(project))

    assert manifest.names == ["util.py"]


def test_analyze_target_outside_project_is_filesystem_error(project: Path, tmp_path: Path) -> None:
    outside = tmp_path / "outside.py"
    outside.write_text("x = 1\n")

    with pytest.raises(FilesystemError):
        analyze_target(TargetSpec(str(outside), "outside"), [], PathResolver(project))
