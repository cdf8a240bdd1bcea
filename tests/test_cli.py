"""CLI tests using click's CliRunner and a directory-backed server."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from driver_publisher.api.exceptions import PublishCancelledError
from driver_publisher.cli.commands import publish as publish_command
from driver_publisher.cli.main import cli
from driver_publisher.models.result import PublishResult


def _write_settings(project: Path, server: Path, **extra) -> None:
    lines = [
        f"serverRootAddress: {server}",
        "driverUniqueName: MyDriver",
        "remoteType: filesystem",
        "fileFilters:",
        "  - '**/*.py'",
        "  - pattern: '**/test_*.py'",
        "    include: false",
    ]
    lines.extend(f"{key}: {value}" for key, value in extra.items())
    (project / "deployment.yaml").write_text("\n".join(lines) + "\n")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def server(tmp_path: Path) -> Path:
    path = tmp_path / "server"
    path.mkdir()
    return path


def test_publish_succeeds(runner, project: Path, server: Path) -> None:
    _write_settings(project, server)

    result = runner.invoke(cli, ["publish", "--project-root", str(project)])

    assert result.exit_code == 0, result.output
    assert "successfully published items" in result.output
    assert (server / "drivers" / "MyDriver.zip").is_file()


def test_publish_entries_mode(runner, project: Path, server: Path) -> None:
    _write_settings(project, server, scripts="[{path: driver.py}]")

    result = runner.invoke(cli, ["publish", "-p", str(project), "--mode", "entries"])

    assert result.exit_code == 0, result.output
    assert (server / "scripts" / "driver.py").read_text() == "class Driver: pass\n"


def test_publish_unknown_host(runner, project: Path, tmp_path: Path) -> None:
    _write_settings(project, tmp_path / "no-such-server")

    result = runner.invoke(cli, ["publish", "--project-root", str(project)])

    assert result.exit_code == 1
    assert "Unknown Host" in result.output


def test_publish_other_failure_shows_cause(runner, project: Path, server: Path) -> None:
    _write_settings(project, server, sourceRootFolder="src")

    result = runner.invoke(cli, ["publish", "--project-root", str(project)])

    assert result.exit_code == 1
    assert "Failed uploading file" in result.output
    assert "Unknown Host" not in result.output


def test_publish_without_settings_file(runner, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["publish", "--project-root", str(tmp_path)])

    assert result.exit_code == 1
    assert "Could not find" in result.output


def test_pack_builds_archive_only(runner, project: Path, server: Path) -> None:
    _write_settings(project, server)

    result = runner.invoke(cli, ["-q", "pack", "--project-root", str(project)])

    assert result.exit_code == 0, result.output
    assert (project / "deployment" / "MyDriver.zip").is_file()
    assert not (server / "drivers").exists()


def test_pack_failure_exit_code(runner, project: Path, server: Path) -> None:
    _write_settings(project, server, sourceRootFolder="src")

    result = runner.invoke(cli, ["pack", "--project-root", str(project)])

    assert result.exit_code == 1
    assert "Packaging failed" in result.output


def test_publish_interrupt_cancels_and_warns(runner, project: Path, server: Path, monkeypatch) -> None:
    class InterruptedTask:
        cancelled = False

        def cancel(self):
            self.cancelled = True

        def result(self, timeout=None):
            if not self.cancelled:
                raise KeyboardInterrupt
            return PublishResult().fail(PublishCancelledError())

    task = InterruptedTask()
    monkeypatch.setattr(publish_command.Publisher, "start", lambda self, settings=None, kind=None: task)
    _write_settings(project, server)

    result = runner.invoke(cli, ["publish", "--project-root", str(project)])

    assert result.exit_code == 130
    assert task.cancelled
    assert "Cancelling publish" in result.output
