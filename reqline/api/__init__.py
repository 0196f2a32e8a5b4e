"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

HTTP API for Reqline.
"""

from reqline.api.app import create_app, run_server

__all__ = ["create_app", "run_server"]
