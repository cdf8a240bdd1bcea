"""Configuration loading service"""

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..api.exceptions import ConfigError
from ..constants import DEPLOYMENT_SETTINGS_FILES, ENV_PASSWORD, MSG_MISSING_CONFIG
from ..core.path_resolver import find_settings_file
from ..core.settings_resolver import resolve
from ..models.settings import PublisherSettings

XML_ROOT_TAG = "properties"
XML_LIST_TAGS = {
    "fileFilters": "filter",
    "drivers": "driver",
    "scripts": "script",
}


def load_yaml_document(path: Path) -> Dict[str, Any]:
    """Load a YAML settings file, expanding environment variables first"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path.name}: {e}") from e

    content = os.path.expandvars(content)

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path.name}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the top level")
    return data


def _split_filters(text: str) -> List[Dict[str, Any]]:
    """Parse ``a, !b`` into filter items; a leading ``!`` excludes"""
    filters = []
    for token in text.replace(';', ',').split(','):
        token = token.strip()
        if not token:
            continue
        if token.startswith('!'):
            filters.append({"pattern": token[1:].strip(), "include": False})
        else:
            filters.append({"pattern": token, "include": True})
    return filters


def _parse_list_element(element: ET.Element, key: str) -> List[Any]:
    item_tag = XML_LIST_TAGS[key]
    items = []

    for child in element:
        if child.tag != item_tag:
            raise ConfigError(f"Unexpected <{child.tag}> in <{key}>, expected <{item_tag}>")

        if key == "fileFilters":
            items.append({
                "pattern": (child.text or "").strip(),
                "include": child.get("include", "true"),
            })
        else:
            target = {"path": child.get("path") or (child.text or "").strip()}
            if child.get("targetName"):
                target["targetName"] = child.get("targetName")
            items.append(target)

    return items


def load_xml_document(path: Path) -> Dict[str, Any]:
    """
    Load an XML settings file

    The root is ``<properties>`` holding ``<entry key="...">`` items and/or
    ``<fileFilters>``, ``<drivers>`` and ``<scripts>`` list elements.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise ConfigError(f"Invalid XML in {path.name}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read {path.name}: {e}") from e

    if root.tag != XML_ROOT_TAG:
        raise ConfigError(f"{path.name}: expected <{XML_ROOT_TAG}> root, found <{root.tag}>")

    document: Dict[str, Any] = {}

    for element in root:
        if element.tag == "entry":
            key = element.get("key")
            if not key:
                raise ConfigError(f"{path.name}: <entry> without a key attribute")
            value = os.path.expandvars((element.text or "").strip())
            document[key] = _split_filters(value) if key == "fileFilters" else value

        elif element.tag in XML_LIST_TAGS:
            document[element.tag] = _parse_list_element(element, element.tag)

        else:
            document[element.tag] = os.path.expandvars((element.text or "").strip())

    return document


class ConfigService:
    """Service for locating and loading publish settings"""

    def __init__(self, project_root: Path, config_path: Optional[Path] = None):
        """Initialize config service

        Args:
            project_root: Project root directory
            config_path: Explicit settings file (searched in project root otherwise)
        """
        self.project_root = Path(project_root)
        self.config_path = Path(config_path) if config_path else None
        self.logger = logging.getLogger(self.__class__.__name__)

    def find_config_file(self) -> Path:
        """Locate the settings file

        Raises:
            ConfigError: If no settings file exists
        """
        if self.config_path is not None:
            path = self.config_path
            if not path.is_absolute():
                path = self.project_root / path
            if not path.is_file():
                raise ConfigError(MSG_MISSING_CONFIG.format(name=path.name))
            return path

        path = find_settings_file(self.project_root)
        if path is None:
            names = ", ".join(DEPLOYMENT_SETTINGS_FILES)
            raise ConfigError(MSG_MISSING_CONFIG.format(name=names))
        return path

    def load_document(self) -> Dict[str, Any]:
        """Load the raw settings document"""
        path = self.find_config_file()
        self.logger.debug(f"Loading settings from {path}")

        if path.suffix.lower() == ".xml":
            document = load_xml_document(path)
        else:
            document = load_yaml_document(path)

        if not document.get("password") and os.environ.get(ENV_PASSWORD):
            document["password"] = os.environ[ENV_PASSWORD]

        return document

    def load_settings(self) -> PublisherSettings:
        """Load and validate publish settings

        Raises:
            ConfigError: If the file is missing or malformed
        """
        return resolve(self.load_document())
