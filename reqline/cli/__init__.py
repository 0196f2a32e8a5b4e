"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Command-line interface for Reqline.
"""

from reqline.cli.main import cli

__all__ = ["cli"]
