# driver_publisher/services/__init__.py
"""Business logic services for driver-publisher"""

from .config_service import ConfigService
from .package_service import PackageService, EntryPlan
from .publish_service import PublishService

__all__ = [
    "ConfigService",
    "PackageService",
    "EntryPlan",
    "PublishService",
]
