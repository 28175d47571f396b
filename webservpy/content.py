"""Building response bytes: content types, directory listings, file, CGI and redirect responses."""

from __future__ import annotations

import os
import re

CHUNKED_THRESHOLD = 1024 * 1024
"""Files larger than this many bytes are sent with chunked transfer encoding."""

DEFAULT_CHUNK_SIZE = 8192

_CONTENT_TYPES: tuple[tuple[tuple[str, ...], str], ...] = (
    ((".html",), "text/html"),
    ((".css",), "text/css"),
    ((".js",), "application/javascript"),
    ((".png",), "image/png"),
    ((".jpg", ".jpeg"), "image/jpeg"),
    ((".gif",), "image/gif"),
    ((".ico",), "image/x-icon"),
    ((".txt",), "text/plain"),
    ((".json",), "application/json"),
    ((".xml",), "application/xml"),
    ((".pdf",), "application/pdf"),
    ((".zip",), "application/zip"),
    ((".mp4",), "video/mp4"),
    ((".mp3",), "audio/mpeg"),
    ((".svg",), "image/svg+xml"),
    ((".woff",), "font/woff"),
    ((".woff2",), "font/woff2"),
    ((".ttf",), "font/ttf"),
    ((".otf",), "font/otf"),
    ((".eot",), "font/eot"),
    ((".webp",), "image/webp"),
)

_BARE_NEWLINE = re.compile(rb"(?<!\r)\n")


def content_type(path: str | os.PathLike[str]) -> str:
    """Return the MIME type for ``path`` judged by its extension."""
    name = os.fspath(path)
    for suffixes, mime in _CONTENT_TYPES:
        if name.endswith(suffixes):
            return mime
    return "application/octet-stream"


def directory_listing(directory: str | os.PathLike[str], uri: str, fmt: str) -> str:
    """List ``directory`` as an HTML page or a JSON array of names.

    Subdirectories get a trailing '/'. Raises OSError when the directory
    cannot be read and ValueError for a format other than 'html' or 'json'.
    """
    base = os.fspath(directory)
    entries = os.listdir(base)
    if fmt not in ("html", "json"):
        raise ValueError(f"Unsupported format: {fmt}")

    names = [
        name + "/" if os.path.isdir(os.path.join(base, name)) else name
        for name in entries
        if name not in (".", "..")
    ]

    if fmt == "html":
        items = "".join(
            f'<li><a href="{uri}/{name}">{name}</a></li>\n' for name in names
        )
        return (
            "<!DOCTYPE html>\n<html>\n<head>\n"
            f"<title>Index of {uri}</title>\n</head>\n<body>\n"
            f"<h1>Index of {uri}</h1>\n<ul>\n"
            f"{items}"
            "</ul>\n</body>\n</html>"
        )
    return "[" + ",".join(f'"{name}"' for name in names) + "]"


def full_response(path: str | os.PathLike[str], content_type: str) -> bytes:
    """Return a 200 response carrying the whole file with a Content-Length header."""
    with open(path, "rb") as handle:
        body = handle.read()
    head = (
        "HTTP/1.1 200 OK\r\n"
        f"Content-Type: {content_type}\r\n"
        f"Content-Length: {len(body)}\r\n"
        "\r\n"
    )
    return head.encode("utf-8") + body


def chunked_response(
    path: str | os.PathLike[str],
    content_type: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """Return a 200 response carrying the file in chunked transfer encoding.

    Raises OSError when the file cannot be opened.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    head = (
        "HTTP/1.1 200 OK\r\n"
        f"Content-Type: {content_type}\r\n"
        "Transfer-Encoding: chunked\r\n"
        "\r\n"
    )
    parts = [head.encode("utf-8")]
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(chunk_size), b""):
            parts.append(f"{len(chunk):x}\r\n".encode("ascii"))
            parts.append(chunk)
            parts.append(b"\r\n")
    parts.append(b"0\r\n\r\n")
    return b"".join(parts)


def cgi_response(output: bytes) -> bytes:
    """Turn a CGI program's output into a full 200 response.

    Bare newlines become CRLF, empty header lines are dropped and a
    ``Content-Type: text/html`` header is added when none is given. Raises
    ValueError when the output has no blank line ending its headers.
    """
    normalized = _BARE_NEWLINE.sub(b"\r\n", output)
    header_end = normalized.find(b"\r\n\r\n")
    if header_end == -1:
        raise ValueError("Invalid CGI response format")
    headers = normalized[: header_end + 4]
    body = normalized[header_end + 4 :]

    lines: list[bytes] = []
    has_content_type = False
    for line in headers.split(b"\n"):
        if line.endswith(b"\r"):
            line = line[:-1]
        if not line:
            continue
        if line.startswith((b"Content-type:", b"Content-Type:")):
            has_content_type = True
        lines.append(line + b"\r\n")
    if not has_content_type:
        lines.append(b"Content-Type: text/html\r\n")

    return b"HTTP/1.1 200 OK\r\n" + b"".join(lines) + b"\r\n" + body


def redirect_response(code: int, url: str) -> bytes:
    """Return a redirect response with status ``code`` pointing to ``url``."""
    return f"HTTP/1.1 {code} Redirect\r\nLocation: {url}\r\n\r\n".encode("utf-8")