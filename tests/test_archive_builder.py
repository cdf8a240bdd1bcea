"""Tests for zip archive creation."""

import zipfile
from pathlib import Path

import pytest

from driver_publisher.api.exceptions import ArchiveIOError
from driver_publisher.core import archive_builder
from driver_publisher.core.archive_analyzer import analyze
from driver_publisher.core.archive_builder import (
    build,
    debug_entries,
    make_debug_descriptor,
)
from driver_publisher.models.manifest import ArchiveManifest
from driver_publisher.models.settings import PublisherSettings

EXPECTED_DEBUG_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'
    "<properties>\n"
    '<entry key="loadFrom">/proj</entry>\n'
    '<entry key="waitForDebugger">true</entry>\n'
    "</properties>\n"
)


def _settings(**kwargs) -> PublisherSettings:
    return PublisherSettings(server_root_address="cs.local", driver_unique_name="MyDriver", **kwargs)


def test_archive_contains_manifest_entries(project: Path, tmp_path: Path) -> None:
    manifest = analyze(project)
    handle = build(manifest, None, tmp_path / "out" / "MyDriver.zip")

    assert handle.path.is_file()
    assert handle.entry_count == len(manifest)
    assert handle.size == handle.path.stat().st_size
    assert len(handle.checksum) == 64

    with zipfile.ZipFile(handle.path) as archive:
        assert sorted(archive.namelist()) == sorted(manifest.names)
        assert archive.read("helpers/util.py") == (project / "helpers" / "util.py").read_bytes()


def test_synthetic_entry_overrides_file_entry(project: Path, tmp_path: Path) -> None:
    (project / "config.xml").write_text("<from-disk/>")
    manifest = analyze(project)

    handle = build(manifest, {"config.xml": b"<synthetic/>"}, tmp_path / "a.zip")

    with zipfile.ZipFile(handle.path) as archive:
        assert archive.namelist().count("config.xml") == 1
        assert archive.read("config.xml") == b"<synthetic/>"


def test_identical_input_gives_identical_bytes(project: Path, tmp_path: Path) -> None:
    manifest = analyze(project)

    first = build(manifest, {"debug.xml": "x"}, tmp_path / "one.zip")
    second = build(manifest, {"debug.xml": "x"}, tmp_path / "two.zip")

    assert first.path.read_bytes() == second.path.read_bytes()


def test_debug_descriptor_content() -> None:
    assert make_debug_descriptor("/proj", True).decode("utf-8") == EXPECTED_DEBUG_XML


def test_debug_descriptor_escapes_xml() -> None:
    content = make_debug_descriptor("/a&b", False).decode("utf-8")
    assert "<entry key=\"loadFrom\">/a&amp;b</entry>" in content
    assert "<entry key=\"waitForDebugger\">false</entry>" in content


def test_debug_entries_only_when_running_from_local_project(tmp_path: Path) -> None:
    assert debug_entries(_settings(), tmp_path) == {}

    entries = debug_entries(_settings(run_from_local_project=True, wait_for_debugger=True), tmp_path)

    assert list(entries) == ["debug.xml"]
    assert f"<entry key=\"loadFrom\">{tmp_path.absolute()}</entry>" in entries["debug.xml"].decode()


def test_failed_build_leaves_no_archive(project: Path, tmp_path: Path, monkeypatch) -> None:
    destination = tmp_path / "MyDriver.zip"
    destination.write_bytes(b"stale archive from an earlier run")

    def broken_write(fileobj, manifest):
        fileobj.write(b"partial")
        raise OSError("disk full")

    monkeypatch.setattr(archive_builder, "_write_zip", broken_write)

    with pytest.raises(ArchiveIOError):
        build(analyze(project), None, destination)

    assert not destination.exists()
    assert list(tmp_path.glob(".MyDriver.zip.*")) == []


def test_unreadable_source_is_archive_io_error(tmp_path: Path) -> None:
    manifest = ArchiveManifest()
    manifest.add_file("gone.py", tmp_path / "gone.py")

    with pytest.raises(ArchiveIOError):
        build(manifest, None, tmp_path / "out.zip")

    assert not (tmp_path / "out.zip").exists()
