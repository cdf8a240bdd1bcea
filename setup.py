#!/usr/bin/env python3
"""
Setup script for driver-publisher.
"""

import codecs
import os
import re
from setuptools import setup, find_packages


def read(rel_path):
    """Read file content."""
    here = os.path.abspath(os.path.dirname(__file__))
    with codecs.open(os.path.join(here, rel_path), 'r', 'utf-8') as fp:
        return fp.read()


def find_version(rel_path):
    """Extract version from __version__.py file."""
    init_content = read(rel_path)
    version_match = re.search(
        r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
        init_content,
        re.MULTILINE
    )
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


if __name__ == "__main__":
    setup(
        name="driver-publisher",
        version=find_version("driver_publisher/__version__.py"),
        description="Package and publish CloudShell Python drivers and scripts",
        packages=find_packages(exclude=["tests*", "docs*", "examples*", "scripts*"]),
        python_requires=">=3.8",
        install_requires=[
            "click>=8.0",
            "rich>=12.0",
            "PyYAML>=6.0",
            "jsonschema>=4.0",
            "aiofiles>=0.8",
            "requests>=2.25",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
                "pytest-asyncio>=0.21",
            ],
        },
        entry_points={
            "console_scripts": [
                "driver-publisher=driver_publisher.cli.main:main",
            ],
        },
    )
