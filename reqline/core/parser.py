"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Statement parser for reqline.

Turns a raw statement such as::

    HTTP POST | URL https://api.example.com/users | BODY {"name": "ada"}

into a RequestDescriptor, or a ParseError naming the first rule violated.
Parsing is pure: no I/O and nothing is raised for malformed input.

Rules are checked in a fixed order. The pipe-spacing scan runs over the whole
unsplit statement before any section is inspected, so a spacing fault is
always reported as such even when a section is also malformed.
"""

import json
from typing import Any, Dict, List, Tuple, Union

from reqline.core.messages import ParseErrorCode
from reqline.core.models import HttpMethod, ParseError, RequestDescriptor
from reqline.logging_config import get_logger, log_reqline_parse

logger = get_logger(__name__)


REQUIRED_KEYWORDS: Tuple[str, ...] = ("HTTP", "URL")
OPTIONAL_KEYWORDS: Tuple[str, ...] = ("HEADERS", "QUERY", "BODY")
KEYWORDS: Tuple[str, ...] = REQUIRED_KEYWORDS + OPTIONAL_KEYWORDS
VALID_METHODS: Tuple[str, ...] = tuple(method.value for method in HttpMethod)

PIPE = "|"
URL_SCHEMES: Tuple[str, ...] = ("http://", "https://")

_JSON_SECTIONS: Dict[str, Tuple[str, ParseErrorCode]] = {
    "HEADERS": ("headers", ParseErrorCode.INVALID_JSON_HEADERS),
    "QUERY": ("query", ParseErrorCode.INVALID_JSON_QUERY),
    "BODY": ("body", ParseErrorCode.INVALID_JSON_BODY),
}

# Partial result of one section: the field it sets, or the error it hit.
SectionResult = Union[Dict[str, Any], ParseError]
ParseResult = Union[RequestDescriptor, ParseError]


def parse_reqline(reqline: Any) -> ParseResult:
    """
    Parse a reqline statement.

    Args:
        reqline: Raw statement

    Returns:
        RequestDescriptor on success, ParseError for the first violated rule
    """
    try:
        result = _parse(reqline)
    except Exception as e:
        logger.error(f"Unexpected failure parsing reqline statement: {e}", exc_info=True)
        result = ParseError.from_code(ParseErrorCode.PARSING_ERROR)

    if isinstance(result, ParseError):
        log_reqline_parse(logger, success=False, error_code=result.code.name)
    else:
        log_reqline_parse(logger, success=True, method=result.method.value, url=result.url)
    return result


def _parse(reqline: Any) -> ParseResult:
    if not isinstance(reqline, str) or not reqline:
        return ParseError.from_code(ParseErrorCode.INVALID_INPUT_FORMAT)

    if not validate_pipe_spacing(reqline):
        return ParseError.from_code(ParseErrorCode.INVALID_PIPE_SPACING)

    parts = reqline.split(PIPE)
    if len(parts) < 2:
        return ParseError.from_code(ParseErrorCode.MISSING_HTTP_KEYWORD)

    parsed: Dict[str, Any] = {}
    for index, raw_part in enumerate(parts):
        part = raw_part.strip()
        if not part:
            continue

        section = parse_part(part, index)
        if isinstance(section, ParseError):
            return section

        # A repeated section replaces the earlier one.
        parsed.update(section)

    if not parsed.get("method"):
        return ParseError.from_code(ParseErrorCode.MISSING_HTTP_KEYWORD)
    if not parsed.get("url"):
        return ParseError.from_code(ParseErrorCode.MISSING_URL_KEYWORD)
    if parsed["method"] not in VALID_METHODS:
        return ParseError.from_code(ParseErrorCode.INVALID_HTTP_METHOD)

    return RequestDescriptor(
        method=HttpMethod(parsed["method"]),
        url=parsed["url"],
        headers=parsed.get("headers", {}),
        query=parsed.get("query", {}),
        body=parsed.get("body", {}),
    )


def validate_pipe_spacing(reqline: str) -> bool:
    """
    Check that every pipe has exactly one space on each side.

    A pipe at the very start of the statement needs no leading space, and a
    pipe at the very end needs no trailing space. Runs of several spaces next
    to a pipe are rejected.
    """
    pipe_indexes: List[int] = [i for i, char in enumerate(reqline) if char == PIPE]
    last = len(reqline) - 1

    for index in pipe_indexes:
        if index > 0:
            if reqline[index - 1] != " ":
                return False
            if index > 1 and reqline[index - 2] == " ":
                return False
        if index < last:
            if reqline[index + 1] != " ":
                return False
            if index + 1 < last and reqline[index + 2] == " ":
                return False

    return True


def parse_part(part: str, index: int) -> SectionResult:
    """
    Parse one trimmed section of a statement.

    Args:
        part: Section text with surrounding whitespace removed
        index: Position of the section among all split parts, empty ones included
    """
    for keyword in KEYWORDS:
        if part.startswith(keyword + " "):
            return parse_keyword_section(part, keyword, index)

    if "  " in part:
        return ParseError.from_code(ParseErrorCode.MULTIPLE_SPACES)

    return ParseError.from_code(ParseErrorCode.KEYWORDS_MUST_BE_UPPERCASE)


def parse_keyword_section(part: str, keyword: str, index: int) -> SectionResult:
    """
    Validate the spacing after a matched keyword and dispatch on it.

    Keywords are matched case-sensitively in parse_part, so any section that
    reaches here already carries an uppercase keyword.
    """
    value = part[len(keyword) + 1:]
    if value.startswith(" "):
        return ParseError.from_code(ParseErrorCode.MISSING_SPACE_AFTER_KEYWORD)

    value = value.strip()
    if not value:
        return ParseError.from_code(ParseErrorCode.MISSING_KEYWORD_VALUE, keyword=keyword)

    if keyword == "HTTP":
        return parse_http_section(value, index)
    if keyword == "URL":
        return parse_url_section(value, index)

    field_name, error_code = _JSON_SECTIONS[keyword]
    return parse_json_section(value, field_name, error_code)


def parse_http_section(value: str, index: int) -> SectionResult:
    if index != 0:
        return ParseError.from_code(ParseErrorCode.HTTP_MUST_BE_FIRST)

    method = value.strip()
    if not method:
        return ParseError.from_code(ParseErrorCode.MISSING_HTTP_METHOD)

    # Case is checked before membership, so "get" is a case error, not an
    # unsupported method.
    if method != method.upper():
        return ParseError.from_code(ParseErrorCode.HTTP_METHOD_MUST_BE_UPPERCASE)

    return {"method": method}


def parse_url_section(value: str, index: int) -> SectionResult:
    if index != 1:
        return ParseError.from_code(ParseErrorCode.URL_MUST_BE_SECOND)

    url = value.strip()
    if not url:
        return ParseError.from_code(ParseErrorCode.MISSING_URL_VALUE)

    if not url.startswith(URL_SCHEMES):
        return ParseError.from_code(ParseErrorCode.INVALID_URL_FORMAT)

    return {"url": url}


def parse_json_section(value: str, field_name: str, error_code: ParseErrorCode) -> SectionResult:
    """
    Decode a HEADERS, QUERY or BODY section.

    Only JSON objects are accepted; arrays, scalars and null are rejected.
    """
    try:
        decoded = json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        return ParseError.from_code(error_code)

    if not isinstance(decoded, dict):
        return ParseError.from_code(error_code)

    return {field_name: decoded}


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON.
    raise ValueError(f"Invalid JSON constant: {name}")
