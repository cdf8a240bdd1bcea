"""Tests for manifest and result models."""

from pathlib import Path

import pytest

from driver_publisher.api.exceptions import (
    ConfigError,
    NothingToPublishError,
    PublishCancelledError,
    RemoteUpdateError,
)
from driver_publisher.constants import ErrorCode, UpdaterKind
from driver_publisher.core.path_resolver import PathResolver, find_project_root, find_settings_file
from driver_publisher.models.manifest import ArchiveManifest, BufferSource, FileSource
from driver_publisher.models.result import ErrorKind, OperationStatus, PublishResult, classify_error


def test_merged_manifest_applies_synthetic_entries_last() -> None:
    manifest = ArchiveManifest()
    manifest.add_file("a.py", "/src/a.py")
    manifest.add_file("debug.xml", "/src/debug.xml")

    merged = manifest.merged({"debug.xml": "<generated/>"})

    assert isinstance(manifest.get("debug.xml"), FileSource)
    assert merged.get("debug.xml") == BufferSource(b"<generated/>")
    assert merged.names == ["a.py", "debug.xml"]
    assert len(merged) == 2


def test_remove_returns_dropped_source() -> None:
    manifest = ArchiveManifest()
    manifest.add_buffer("x", b"1")

    assert manifest.remove("x") == BufferSource(b"1")
    assert manifest.remove("x") is None
    assert manifest.is_empty


@pytest.mark.parametrize("error, kind", [
    (ConfigError("bad"), ErrorKind.CONFIG),
    (NothingToPublishError(), ErrorKind.NOTHING_TO_PUBLISH),
    (PublishCancelledError(), ErrorKind.CANCELLED),
    (ValueError("boom"), ErrorKind.UNEXPECTED),
])
def test_classify_error(error, kind) -> None:
    assert classify_error(error) == kind


def test_failed_result_carries_applied_entries() -> None:
    result = PublishResult(updater_kind=UpdaterKind.PER_ENTRY)

    result.fail(RemoteUpdateError("b.py", "rejected", ["a.py"]))

    assert result.status == OperationStatus.FAILED
    assert result.applied_entries == ["a.py"]
    assert result.error.code == ErrorCode.REMOTE_UPDATE_FAILED
    assert result.duration is not None


def test_cancelled_result_status() -> None:
    result = PublishResult().fail(PublishCancelledError())

    assert result.status == OperationStatus.CANCELLED
    assert result.is_failed
    assert not result.is_success


def test_nothing_to_publish_message() -> None:
    assert str(NothingToPublishError()) == "no items found for publishing"


def test_find_project_root_walks_upwards(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("PROJECT_ROOT", raising=False)
    (tmp_path / "deployment.xml").write_text("<properties/>")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == tmp_path.resolve()
    assert find_settings_file(tmp_path) == tmp_path / "deployment.xml"


def test_path_resolver_archive_path(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path)

    assert resolver.get_archive_path("MyDriver") == tmp_path.resolve() / "deployment" / "MyDriver.zip"
    assert resolver.is_under_project(tmp_path / "x")
    assert not resolver.is_under_project(tmp_path.parent)
