"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Version information for Reqline.

A source checkout reads the VERSION file at the repository root; an installed
distribution reports the version recorded in its metadata.
"""

from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "reqline"


def get_version() -> str:
    """
    Resolve the Reqline version.

    Returns:
        str: The version string (e.g., "1.0.0"), or "unknown" if neither
        source is available
    """
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "unknown"


__version__ = get_version()
