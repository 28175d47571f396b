"""Small helpers shared by the server: number parsing, file checks, multipart and status text."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

_C_WHITESPACE = " \t\n\v\f\r"
_INTEGER_PREFIX = re.compile(r"[+-]?\d+")

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LLONG_MIN = -(2**63)
_LLONG_MAX = 2**63 - 1
_ULLONG_MAX = 2**64 - 1

_STATUS_MESSAGES = {
    200: "OK",
    201: "Created",
    204: "No Content",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    307: "Temporary Redirect",
    308: "Permanent Redirect",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    408: "Request Timeout",
    409: "Conflict",
    413: "Payload Too Large",
    414: "URI Too Long",
    415: "Unsupported Media Type",
    429: "Too Many Requests",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
}


def _leading_integer(text: str) -> tuple[int, str]:
    """Parse the integer at the start of ``text`` (after whitespace); return it and the rest."""
    stripped = text.lstrip(_C_WHITESPACE)
    match = _INTEGER_PREFIX.match(stripped)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group()), stripped[match.end():]


def parse_int(text: str) -> int:
    """Parse a whole string as a 32-bit signed integer.

    Raises ValueError when the text is not a number or has trailing characters,
    and OverflowError when the number does not fit in 32 bits.
    """
    value, rest = _leading_integer(text)
    if value < _LLONG_MIN or value > _LLONG_MAX:
        raise ValueError(f"not an integer: {text!r}")
    if rest.strip(_C_WHITESPACE):
        raise ValueError(f"extra characters found in {text!r}")
    if value < _INT_MIN or value > _INT_MAX:
        raise OverflowError(f"value out of range: {text!r}")
    return value


def parse_unsigned(text: str) -> int:
    """Parse a leading unsigned 64-bit integer; trailing text is ignored.

    A leading minus sign wraps the value around, as unsigned stream extraction does.
    """
    value, _ = _leading_integer(text)
    magnitude = abs(value)
    if magnitude > _ULLONG_MAX:
        raise ValueError(f"value out of range: {text!r}")
    if value < 0:
        return (2**64 - magnitude) % 2**64
    return value


def directory_exists(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` names an existing directory."""
    return os.path.isdir(path)


def file_exists(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` names an existing regular file."""
    return os.path.isfile(path)


def create_directory(path: str | os.PathLike[str]) -> bool:
    """Create a directory with mode 0755; return whether it was created."""
    try:
        os.mkdir(path, 0o755)
    except OSError:
        return False
    return True


def sanitize_file_name(name: str) -> str:
    """Keep only ASCII letters, digits, '.', '_' and '-'."""
    return "".join(
        ch for ch in name if (ch.isascii() and ch.isalnum()) or ch in "._-"
    )


def extract_file_name_from_multipart(raw: str) -> str:
    """Return the quoted filename of the first part's Content-Disposition, or ''."""
    disposition = raw.find("Content-Disposition:")
    if disposition == -1:
        return ""
    filename_at = raw.find("filename=", disposition)
    if filename_at == -1:
        return ""
    start = raw.find('"', filename_at)
    if start == -1:
        return ""
    end = raw.find('"', start + 1)
    if end == -1:
        return ""
    return raw[start + 1:end]


def is_file_transfer(method: str, headers: Mapping[str, str], body: str) -> bool:
    """Tell whether a request uploads a file (multipart with a filename, or octet-stream POST)."""
    if method != "POST":
        return False
    content_type = headers.get("Content-Type")
    if content_type is None:
        return False
    if "multipart/form-data" in content_type:
        return "filename=" in body
    return "application/octet-stream" in content_type


def status_message(code: int) -> str:
    """Return the reason phrase for an HTTP status code."""
    return _STATUS_MESSAGES.get(code, "Unknown Status Code")