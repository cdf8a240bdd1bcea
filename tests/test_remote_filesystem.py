"""Tests for the directory-backed remote client."""

from pathlib import Path

import pytest

from driver_publisher.api.exceptions import RemoteUpdateError, UnknownHostError
from driver_publisher.constants import EntryKind, RemoteType
from driver_publisher.models.settings import PublisherSettings
from driver_publisher.remote import FilesystemRemote, RemoteClientFactory


@pytest.mark.asyncio
async def test_stores_drivers_and_scripts(tmp_path: Path) -> None:
    async with FilesystemRemote({"path": str(tmp_path)}) as remote:
        await remote.update_driver("MyDriver", b"zip-bytes")
        await remote.update_script("tools/run.py", b"print(1)\n")

        assert await remote.get_entry(EntryKind.DRIVER, "MyDriver") == b"zip-bytes"
        assert await remote.get_entry(EntryKind.SCRIPT, "tools/run.py") == b"print(1)\n"
        assert await remote.get_entry(EntryKind.SCRIPT, "missing.py") is None
        assert await remote.list_entries(EntryKind.DRIVER) == ["MyDriver"]
        assert await remote.list_entries(EntryKind.SCRIPT) == ["tools/run.py"]

    assert (tmp_path / "drivers" / "MyDriver.zip").read_bytes() == b"zip-bytes"
    assert not remote.is_open


@pytest.mark.asyncio
async def test_driver_archive_is_copied_from_path(tmp_path: Path) -> None:
    archive = tmp_path / "build.zip"
    archive.write_bytes(b"x" * 10000)
    server = tmp_path / "server"
    server.mkdir()

    async with FilesystemRemote({"path": str(server)}) as remote:
        await remote.update_driver("Big", archive)

    assert (server / "drivers" / "Big.zip").read_bytes() == b"x" * 10000
    assert [p.name for p in (server / "drivers").iterdir()] == ["Big.zip"]


@pytest.mark.asyncio
async def test_missing_directory_is_unknown_host(tmp_path: Path) -> None:
    remote = FilesystemRemote({"path": str(tmp_path / "absent")})

    with pytest.raises(UnknownHostError):
        await remote.open()

    assert not remote.is_open


@pytest.mark.asyncio
async def test_entry_names_cannot_escape_the_server(tmp_path: Path) -> None:
    async with FilesystemRemote({"path": str(tmp_path)}) as remote:
        with pytest.raises(RemoteUpdateError):
            await remote.update_script("../outside.py", b"")


@pytest.mark.asyncio
async def test_update_requires_open_session(tmp_path: Path) -> None:
    remote = FilesystemRemote({"path": str(tmp_path)})

    with pytest.raises(RuntimeError):
        await remote.update_script("a.py", b"")


def test_factory_resolves_relative_path_against_project(tmp_path: Path) -> None:
    settings = PublisherSettings(
        server_root_address="server",
        driver_unique_name="MyDriver",
        remote_type=RemoteType.FILESYSTEM,
    )

    remote = RemoteClientFactory.create_from_settings(settings, tmp_path)

    assert isinstance(remote, FilesystemRemote)
    assert remote.base_path == tmp_path / "server"


def test_factory_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        RemoteClientFactory.create_from_dict("ftp", {})

    assert set(RemoteClientFactory.get_supported_types()) >= {"cloudshell", "filesystem"}


def test_registered_client_class_is_used(monkeypatch, tmp_path: Path) -> None:
    class MirrorRemote(FilesystemRemote):
        pass

    monkeypatch.setattr(RemoteClientFactory, "_clients", dict(RemoteClientFactory._clients))
    RemoteClientFactory.register_client(RemoteType.FILESYSTEM, MirrorRemote)

    remote = RemoteClientFactory.create_from_dict("filesystem", {"path": str(tmp_path)})

    assert isinstance(remote, MirrorRemote)
