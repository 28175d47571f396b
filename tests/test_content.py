import json

import pytest

from webservpy.content import (
    cgi_response,
    chunked_response,
    content_type,
    directory_listing,
    full_response,
    redirect_response,
)


def _split_response(raw: bytes) -> tuple[list[bytes], bytes]:
    head, _, body = raw.partition(b"\r\n\r\n")
    return head.split(b"\r\n"), body


def _dechunk(body: bytes) -> list[bytes]:
    chunks = []
    while True:
        size_line, _, rest = body.partition(b"\r\n")
        size = int(size_line, 16)
        if size == 0:
            assert rest == b"\r\n"
            return chunks
        chunks.append(rest[:size])
        assert rest[size : size + 2] == b"\r\n"
        body = rest[size + 2 :]


@pytest.mark.parametrize(
    "path, expected",
    [
        ("index.html", "text/html"),
        ("style.css", "text/css"),
        ("app.js", "application/javascript"),
        ("photo.jpeg", "image/jpeg"),
        ("photo.jpg", "image/jpeg"),
        ("font.woff2", "font/woff2"),
        ("font.woff", "font/woff"),
        ("image.webp", "image/webp"),
        ("archive.tar", "application/octet-stream"),
        ("noextension", "application/octet-stream"),
    ],
)
def test_content_type(path, expected):
    assert content_type(path) == expected


def test_directory_listing_json(tmp_path):
    (tmp_path / "a.txt").write_text("x")
    (tmp_path / "sub").mkdir()
    names = json.loads(directory_listing(tmp_path, "/files", "json"))
    assert sorted(names) == ["a.txt", "sub/"]


def test_directory_listing_empty_json(tmp_path):
    assert directory_listing(tmp_path, "/", "json") == "[]"


def test_directory_listing_html(tmp_path):
    (tmp_path / "a.txt").write_text("x")
    (tmp_path / "sub").mkdir()
    page = directory_listing(tmp_path, "/files", "html")
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Index of /files</title>" in page
    assert '<li><a href="/files/a.txt">a.txt</a></li>' in page
    assert '<li><a href="/files/sub/">sub/</a></li>' in page
    assert page.endswith("</ul>\n</body>\n</html>")


def test_directory_listing_bad_format(tmp_path):
    with pytest.raises(ValueError):
        directory_listing(tmp_path, "/", "xml")


def test_directory_listing_missing_directory(tmp_path):
    with pytest.raises(OSError):
        directory_listing(tmp_path / "missing", "/", "html")


def test_full_response(tmp_path):
    target = tmp_path / "page.html"
    data = b"<p>hello</p>"
    target.write_bytes(data)
    lines, body = _split_response(full_response(target, "text/html"))
    assert lines[0] == b"HTTP/1.1 200 OK"
    assert b"Content-Type: text/html" in lines
    assert f"Content-Length: {len(data)}".encode() in lines
    assert body == data


def test_full_response_missing_file(tmp_path):
    with pytest.raises(OSError):
        full_response(tmp_path / "nope", "text/plain")


def test_chunked_response_round_trip(tmp_path):
    target = tmp_path / "data.bin"
    data = bytes(range(256)) * 10
    target.write_bytes(data)
    lines, body = _split_response(chunked_response(target, "application/octet-stream", 100))
    assert lines[0] == b"HTTP/1.1 200 OK"
    assert b"Transfer-Encoding: chunked" in lines
    chunks = _dechunk(body)
    assert b"".join(chunks) == data
    assert all(len(chunk) == 100 for chunk in chunks[:-1])
    assert 0 < len(chunks[-1]) <= 100


def test_chunked_response_default_chunk_size(tmp_path):
    target = tmp_path / "big.bin"
    data = b"z" * 20000
    target.write_bytes(data)
    _, body = _split_response(chunked_response(target, "application/octet-stream"))
    chunks = _dechunk(body)
    assert b"".join(chunks) == data
    assert all(len(chunk) == 8192 for chunk in chunks[:-1])


def test_chunked_response_empty_file(tmp_path):
    target = tmp_path / "empty"
    target.write_bytes(b"")
    raw = chunked_response(target, "text/plain")
    assert raw.endswith(b"\r\n\r\n0\r\n\r\n")


def test_chunked_response_missing_file(tmp_path):
    with pytest.raises(OSError):
        chunked_response(tmp_path / "nope", "text/plain")


def test_cgi_response_keeps_content_type():
    raw = cgi_response(b"Content-Type: text/plain\n\nhello")
    assert raw == b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\nhello"


def test_cgi_response_adds_default_content_type():
    raw = cgi_response(b"Status: 200\r\n\r\nbody")
    lines, body = _split_response(raw)
    assert lines == [b"HTTP/1.1 200 OK", b"Status: 200", b"Content-Type: text/html"]
    assert body == b"body"


def test_cgi_response_lowercase_content_type_counts():
    raw = cgi_response(b"Content-type: text/plain\n\nx")
    assert b"Content-Type: text/html" not in raw
    assert b"Content-type: text/plain\r\n" in raw


def test_cgi_response_normalizes_body_newlines():
    raw = cgi_response(b"Content-Type: text/plain\n\na\nb\r\nc")
    _, body = _split_response(raw)
    assert body == b"a\r\nb\r\nc"


def test_cgi_response_without_header_end():
    with pytest.raises(ValueError):
        cgi_response(b"Content-Type: text/plain\nno blank line")


def test_redirect_response():
    raw = redirect_response(301, "/new")
    assert raw == b"HTTP/1.1 301 Redirect\r\nLocation: /new\r\n\r\n"