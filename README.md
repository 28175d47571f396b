# webservpy

Parts for building an HTTP/1.1 server. It needs nothing outside the standard
library.

## Modules

- **`webservpy.utils`** holds the small helpers.
  - `parse_int` parses a whole string as a 32-bit signed integer. It raises
    `ValueError` for text that is not a number or has trailing characters, and
    `OverflowError` when the value is out of range.
  - `parse_unsigned` parses a leading unsigned 64-bit integer and ignores any
    text after it.
  - `directory_exists`, `file_exists` and `create_directory` check for and
    create paths. `create_directory` uses mode 0755.
  - `sanitize_file_name` keeps only ASCII letters, digits, `.`, `_` and `-`.
  - `extract_file_name_from_multipart` returns the quoted `filename=` value
    that follows `Content-Disposition:`.
  - `is_file_transfer` tells whether a request is an upload. That is a POST
    sent either as multipart with a filename or as `application/octet-stream`.
  - `status_message` gives the reason phrase for a status code, or
    `"Unknown Status Code"` for a code it does not know.
- **`webservpy.listener`** provides `ListeningSocket`. This is a non-blocking
  IPv4 TCP listener with `SO_REUSEADDR` set. It has `fileno()`, `accept()` and
  `close()`, and can be used as a context manager. Pass port `0` to let the
  system pick a port; the chosen port is then in `.port`.
- **`webservpy.vhost`** holds the configuration records `ServerBlock` and
  `LocationBlock`.
  - `match_server` picks a virtual host by `Host` header and port. A block whose
    server name matches and that listens on the port wins. Failing that, the
    first block listening on the port is used. It raises `ValueError` when the
    `Host` header is missing and `NoMatchingServer` when no block listens on the
    port.
  - `bind_addresses` returns each distinct `(ip, port)` pair once, in order.
- **`webservpy.content`** builds response bytes.
  - `content_type` maps a file extension to a MIME type.
  - `directory_listing` lists a directory as an HTML page or a JSON array, with
    `fmt` set to `"html"` or `"json"`.
  - `full_response` sends a file with `Content-Length`.
  - `chunked_response` sends a file with chunked transfer encoding.
    `CHUNKED_THRESHOLD` is the size above which a file should be sent this way.
  - `cgi_response` turns raw CGI output into a 200 response. It normalises
    CRLF line endings and adds a default `Content-Type` when there is none.
  - `redirect_response` builds a redirect.

## Install

```
pip install .
pip install ".[test]"
```

## Example

```python
from webservpy.vhost import ServerBlock, match_server
from webservpy.content import content_type, redirect_response

servers = [ServerBlock(server_names=["example.com"], listen=[("0.0.0.0", 8080)], root="www")]
block = match_server(servers, {"Host": "example.com:8080"}, 8080)

content_type("www/index.html")            # "text/html"
redirect_response(301, "/new")            # b"HTTP/1.1 301 Redirect\r\nLocation: /new\r\n\r\n"
```

## What it does not do

This package does not include a running server. There is no event loop, no
command to start one, and no reading of configuration files. It does not parse
requests, dispatch GET, POST or DELETE, or generate error pages. It does not
track request timeouts or run CGI programs. You combine these parts with your
own connection handling.

## Tests

```
pytest
```