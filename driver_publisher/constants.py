"""Global constants for driver-publisher"""

from enum import Enum

APP_NAME = "driver-publisher"
LOG_FORMAT = "%(message)s"

# Project configuration, searched in this order
DEPLOYMENT_SETTINGS_FILES = [
    "deployment.yaml",
    "deployment.yml",
    "deployment.xml",
]

# Directory structure
DEFAULT_DEPLOYMENT_DIR = "deployment"
ARCHIVE_FILE_PATTERN = "{name}.zip"

# Debug descriptor injected when running from the local project
DEBUG_SETTINGS_FILE_NAME = "debug.xml"
DEBUG_SETTINGS_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'
    "<properties>\n"
    '<entry key="loadFrom">{load_from}</entry>\n'
    '<entry key="waitForDebugger">{wait_for_debugger}</entry>\n'
    "</properties>\n"
)

# Default configuration values
DEFAULT_PORT = 9000
DEFAULT_DOMAIN = "Global"
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB
DEFAULT_REQUEST_TIMEOUT = 60  # seconds

# Fixed zip entry attributes so identical input gives identical bytes
ZIP_ENTRY_TIMESTAMP = (1980, 1, 1, 0, 0, 0)
ZIP_ENTRY_MODE = 0o644

BOOLEAN_TRUE = "true"
BOOLEAN_FALSE = "false"

# CloudShell REST endpoints
API_LOGIN = "/API/Auth/Login"
API_UPDATE_DRIVER = "/API/Package/UpdateDriver/{name}"
API_UPDATE_SCRIPT = "/API/Package/UpdateScript/{name}"

# Filesystem remote layout
REMOTE_DRIVERS_DIR = "drivers"
REMOTE_SCRIPTS_DIR = "scripts"


class RemoteType(Enum):
    CLOUDSHELL = "cloudshell"
    FILESYSTEM = "filesystem"


class EntryKind(Enum):
    DRIVER = "driver"
    SCRIPT = "script"


class UpdaterKind(Enum):
    BULK_ARCHIVE = "archive"
    PER_ENTRY = "entries"


# Error codes
class ErrorCode:
    CONFIG_ERROR = "DP001"
    FILESYSTEM_ERROR = "DP002"
    ARCHIVE_IO_ERROR = "DP003"
    NOTHING_TO_PUBLISH = "DP004"
    UNKNOWN_HOST = "DP005"
    AUTH_FAILED = "DP006"
    REMOTE_UPDATE_FAILED = "DP007"
    CANCELLED = "DP008"
    UNEXPECTED = "DP999"


# Environment variables
ENV_LOG_LEVEL = "DRIVER_PUBLISHER_LOG_LEVEL"
ENV_PASSWORD = "DRIVER_PUBLISHER_PASSWORD"
ENV_PROJECT_ROOT = "PROJECT_ROOT"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"

# Message templates
MSG_PUBLISH_TITLE = "Publishing Python Driver on CloudShell"
MSG_PUBLISH_SUCCESS = "successfully published items"
MSG_UNKNOWN_HOST = "Failed uploading file:\n Unknown Host"
MSG_PUBLISH_FAILED = "Failed uploading file:\n{error}"
MSG_MISSING_CONFIG = "Could not find {name} in the project folder, cannot upload driver."
MSG_NOTHING_TO_PUBLISH = "no items found for publishing"
