"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

URL construction for reqline requests.
"""

import json
from typing import Any, Mapping, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

# Above this, integral floats keep their exponent form.
_MAX_PLAIN_INTEGER = 1e21


def stringify_value(value: Any) -> str:
    """
    Render a JSON value for use in a query string or header.

    Strings are used verbatim; everything else takes its JSON form, so
    ``True`` becomes ``true`` and ``None`` becomes ``null``. Integral floats
    lose their fraction, so ``1.0`` and ``1e2`` render as ``1`` and ``100``.
    """
    if isinstance(value, str):
        return value
    return json.dumps(_drop_integral_fractions(value), separators=(",", ":"))


def _drop_integral_fractions(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer() and abs(value) < _MAX_PLAIN_INTEGER:
        return int(value)
    if isinstance(value, dict):
        return {key: _drop_integral_fractions(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_drop_integral_fractions(item) for item in value]
    return value


def build_full_url(url: str, query: Optional[Mapping[str, Any]] = None) -> str:
    """
    Append query parameters to a URL.

    Pairs are appended in mapping order after any query string already on the
    URL and before its fragment. An empty or missing mapping returns the URL
    unchanged.

    Args:
        url: Base URL
        query: Query parameters

    Returns:
        URL including the encoded query parameters

    Examples:
        build_full_url("https://api.example.com", {"a": 1}) -> "https://api.example.com?a=1"
        build_full_url("https://api.example.com?x=y", {"a": "b c"}) -> "https://api.example.com?x=y&a=b+c"
    """
    if not query:
        return url

    scheme, netloc, path, existing, fragment = urlsplit(url)
    encoded = urlencode([(str(key), stringify_value(value)) for key, value in query.items()])
    merged = f"{existing}&{encoded}" if existing else encoded

    return urlunsplit((scheme, netloc, path, merged, fragment))
