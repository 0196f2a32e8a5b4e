"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Reqline - HTTP requests described as single-line pipe-delimited statements

Reqline parses statements such as ``HTTP GET | URL https://api.example.com``
into validated request descriptors, issues the described request and reports
both the request that was sent and the response that came back.
"""

from reqline._version import __version__

__all__ = ["__version__"]
