"""Tests for the CloudShell HTTP client with a fake requests session."""

import socket

import pytest
import requests

from driver_publisher.api.exceptions import AuthError, RemoteUpdateError, UnknownHostError
from driver_publisher.constants import RemoteType
from driver_publisher.models.settings import PublisherSettings
from driver_publisher.remote import CloudShellClient, RemoteClientFactory


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class FakeSession:
    """Records PUT requests and answers from a route table."""

    def __init__(self, routes):
        self.routes = routes
        self.headers = {}
        self.requests = []
        self.closed = False

    def put(self, url, json=None, files=None, timeout=None):
        self.requests.append({"url": url, "json": json, "files": files})
        response = self.routes.get(url.split(":9000", 1)[-1], FakeResponse(404, "not found"))
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def resolvable(monkeypatch):
    monkeypatch.setattr(socket, "getaddrinfo", lambda host, port: [("ok",)])


def _client(session, host="cs.local"):
    config = {
        "host": host,
        "port": 9000,
        "username": "admin",
        "password": "secret",
        "domain": "Global",
    }
    return CloudShellClient(config, session_factory=lambda: session)


@pytest.mark.asyncio
async def test_login_and_update_driver(resolvable) -> None:
    session = FakeSession({
        "/API/Auth/Login": FakeResponse(200, '"token-123"'),
        "/API/Package/UpdateDriver/MyDriver": FakeResponse(200),
        "/API/Package/UpdateScript/run.py": FakeResponse(200),
    })

    async with _client(session) as client:
        await client.update_driver("MyDriver", b"zip-bytes")
        await client.update_script("run.py", b"print(1)\n")

    login, driver, script = session.requests
    assert login["url"] == "http://cs.local:9000/API/Auth/Login"
    assert login["json"] == {"username": "admin", "password": "secret", "domain": "Global"}
    assert session.headers["Authorization"] == "Basic token-123"
    assert driver["files"] == {"file": ("MyDriver.zip", b"zip-bytes")}
    assert script["files"] == {"file": ("run.py", b"print(1)\n")}
    assert session.closed


@pytest.mark.asyncio
async def test_unresolvable_host_is_unknown_host(monkeypatch) -> None:
    def fail(host, port):
        raise socket.gaierror("Name or service not known")

    monkeypatch.setattr(socket, "getaddrinfo", fail)
    session = FakeSession({})

    with pytest.raises(UnknownHostError):
        await _client(session, host="nowhere.invalid").open()

    assert session.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_rejected_login_is_auth_error(resolvable, status) -> None:
    session = FakeSession({"/API/Auth/Login": FakeResponse(status, "denied")})
    client = _client(session)

    with pytest.raises(AuthError):
        await client.open()

    assert not client.is_open
    assert session.closed


@pytest.mark.asyncio
async def test_rejected_update_is_remote_update_error(resolvable) -> None:
    session = FakeSession({
        "/API/Auth/Login": FakeResponse(200, "token"),
        "/API/Package/UpdateDriver/MyDriver": FakeResponse(500, "driver is in use"),
    })

    async with _client(session) as client:
        with pytest.raises(RemoteUpdateError) as exc_info:
            await client.update_driver("MyDriver", b"zip")

    assert exc_info.value.target == "MyDriver"
    assert "500" in exc_info.value.reason


@pytest.mark.asyncio
async def test_connection_failure_is_remote_update_error(resolvable) -> None:
    session = FakeSession({"/API/Auth/Login": requests.exceptions.ConnectionError("refused")})

    with pytest.raises(RemoteUpdateError):
        await _client(session).open()


def test_address_with_scheme_and_port() -> None:
    client = CloudShellClient({"host": "https://cs.example.com:8443", "port": 9000})

    assert client.base_url == "https://cs.example.com:8443"


def test_factory_builds_cloudshell_client_from_settings() -> None:
    settings = PublisherSettings(
        server_root_address="cs.local",
        driver_unique_name="MyDriver",
        port=8029,
        username="admin",
        password="secret",
        remote_type=RemoteType.CLOUDSHELL,
    )

    client = RemoteClientFactory.create_from_settings(settings)

    assert isinstance(client, CloudShellClient)
    assert client.base_url == "http://cs.local:8029"
    assert client.domain == "Global"


@pytest.mark.asyncio
async def test_expired_session_during_update_names_the_script(resolvable) -> None:
    session = FakeSession({
        "/API/Auth/Login": FakeResponse(200, "token"),
        "/API/Package/UpdateScript/run.py": FakeResponse(401, "expired"),
    })

    async with _client(session) as client:
        with pytest.raises(AuthError) as exc_info:
            await client.update_script("run.py", b"print(1)\n")

    assert exc_info.value.target == "run.py"
    assert "run.py" in str(exc_info.value)
