"""Resolve raw configuration documents into PublisherSettings"""

import posixpath
from typing import Any, Dict, List, Mapping, Optional, Tuple

import jsonschema

from ..api.exceptions import ConfigError
from ..constants import (
    BOOLEAN_FALSE,
    BOOLEAN_TRUE,
    DEFAULT_DOMAIN,
    DEFAULT_PORT,
    RemoteType,
)
from ..models.settings import FileFilter, PublisherSettings, TargetSpec

_SCALAR = {"type": ["string", "integer", "boolean", "null"]}
_FLAG = {"type": ["string", "boolean", "null"]}
_TEXT = {"type": ["string", "null"]}

_TARGET_SCHEMA = {
    "type": "object",
    "properties": {
        "path": {"type": "string"},
        "targetName": _TEXT,
    },
    "required": ["path"],
}

SETTINGS_SCHEMA = {
    "type": "object",
    "properties": {
        "serverRootAddress": {"type": "string"},
        "port": {"type": ["string", "integer", "null"]},
        "username": _SCALAR,
        "password": _SCALAR,
        "domain": _TEXT,
        "driverUniqueName": {"type": "string"},
        "sourceRootFolder": _TEXT,
        "runFromLocalProject": _FLAG,
        "waitForDebugger": _FLAG,
        "remoteType": _TEXT,
        "fileFilters": {
            "type": ["array", "null"],
            "items": {
                "anyOf": [
                    {"type": "string"},
                    {
                        "type": "object",
                        "properties": {
                            "pattern": {"type": "string"},
                            "include": _FLAG,
                        },
                        "required": ["pattern"],
                    },
                ]
            },
        },
        "drivers": {"type": ["array", "null"], "items": _TARGET_SCHEMA},
        "scripts": {"type": ["array", "null"], "items": _TARGET_SCHEMA},
    },
    "required": ["serverRootAddress", "driverUniqueName"],
}


def parse_bool(value: Any, key: str) -> bool:
    """
    Parse a flag from ``true``/``false`` (case-insensitive) or a bool

    Raises:
        ConfigError: For any other value
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        text = value.strip().lower()
        if text == BOOLEAN_TRUE:
            return True
        if text == BOOLEAN_FALSE:
            return False

    raise ConfigError(f"Invalid boolean for '{key}': {value!r} (expected true or false)")


def parse_port(value: Any) -> int:
    """
    Parse a positive integer port

    Raises:
        ConfigError: If the value is not a positive integer
    """
    if isinstance(value, bool):
        raise ConfigError(f"Invalid port: {value!r}")

    if isinstance(value, int):
        port = value
    elif isinstance(value, str) and value.strip().isdecimal():
        port = int(value.strip())
    else:
        raise ConfigError(f"Invalid port: {value!r} (expected a positive integer)")

    if port <= 0:
        raise ConfigError(f"Invalid port: {port} (must be positive)")

    return port


def _required_text(document: Mapping[str, Any], key: str) -> str:
    value = document.get(key)
    if value is None or not str(value).strip():
        raise ConfigError(f"Missing required field: {key}")
    return str(value).strip()


def _flag(document: Mapping[str, Any], key: str) -> bool:
    value = document.get(key)
    return False if value is None else parse_bool(value, key)


def _optional_text(document: Mapping[str, Any], key: str, default: str = "") -> str:
    value = document.get(key)
    if value is None:
        return default
    return str(value)


def _parse_filters(items: Optional[List[Any]]) -> Tuple[FileFilter, ...]:
    filters = []

    for item in items or []:
        if isinstance(item, str):
            pattern, include = item, True
        else:
            pattern = item["pattern"]
            include = item.get("include")
            include = True if include is None else parse_bool(include, "fileFilters.include")

        if not pattern.strip():
            raise ConfigError("Empty file filter pattern")

        filters.append(FileFilter(pattern=pattern.strip(), include=include))

    return tuple(filters)


def _default_target_name(path: str, strip_extension: bool) -> str:
    name = posixpath.basename(path.replace("\\", "/").rstrip("/"))
    if strip_extension:
        name = posixpath.splitext(name)[0]
    return name


def _check_name(name: str, key: str) -> None:
    # Names become file names under deployment/ and on the remote
    if "/" in name or "\\" in name or name in (".", ".."):
        raise ConfigError(f"{key} must be a plain name without path separators: {name}")


def _parse_targets(items: Optional[List[Dict[str, Any]]],
                   key: str,
                   strip_extension: bool) -> Tuple[TargetSpec, ...]:
    targets = []

    for item in items or []:
        path = item["path"].strip()
        if not path:
            raise ConfigError(f"Empty path in '{key}'")

        target_name = (item.get("targetName") or "").strip()
        if not target_name:
            target_name = _default_target_name(path, strip_extension)
        if not target_name or target_name in (".", ".."):
            raise ConfigError(f"Cannot derive a target name for '{path}' in '{key}'")
        _check_name(target_name, f"{key}.targetName")

        targets.append(TargetSpec(path=path, target_name=target_name))

    return tuple(targets)


def _parse_remote_type(value: Optional[str]) -> RemoteType:
    if value is None:
        return RemoteType.CLOUDSHELL
    try:
        return RemoteType(value.strip().lower())
    except ValueError:
        supported = ", ".join(t.value for t in RemoteType)
        raise ConfigError(f"Invalid remoteType: {value!r} (supported: {supported})")


def resolve(document: Mapping[str, Any]) -> PublisherSettings:
    """
    Validate a configuration document and build PublisherSettings

    Args:
        document: Parsed key/value document

    Returns:
        Immutable PublisherSettings

    Raises:
        ConfigError: If required fields are missing or any field is malformed
    """
    if not isinstance(document, Mapping):
        raise ConfigError("Configuration document must be a mapping")

    document = dict(document)

    server_root_address = _required_text(document, "serverRootAddress")
    driver_unique_name = _required_text(document, "driverUniqueName")

    try:
        jsonschema.validate(document, SETTINGS_SCHEMA)
    except jsonschema.ValidationError as e:
        location = ".".join(str(p) for p in e.absolute_path)
        raise ConfigError(f"Invalid configuration at '{location or '<root>'}': {e.message}") from e

    _check_name(driver_unique_name, "driverUniqueName")

    port = document.get("port")
    source_root_folder = (document.get("sourceRootFolder") or "").strip() or None

    return PublisherSettings(
        server_root_address=server_root_address,
        driver_unique_name=driver_unique_name,
        port=DEFAULT_PORT if port is None else parse_port(port),
        username=_optional_text(document, "username"),
        password=_optional_text(document, "password"),
        domain=_optional_text(document, "domain", DEFAULT_DOMAIN) or DEFAULT_DOMAIN,
        source_root_folder=source_root_folder,
        file_filters=_parse_filters(document.get("fileFilters")),
        run_from_local_project=_flag(document, "runFromLocalProject"),
        wait_for_debugger=_flag(document, "waitForDebugger"),
        drivers=_parse_targets(document.get("drivers"), "drivers", strip_extension=True),
        scripts=_parse_targets(document.get("scripts"), "scripts", strip_extension=False),
        remote_type=_parse_remote_type(document.get("remoteType")),
    )
