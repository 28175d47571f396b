"""Server and location blocks, and choosing the block that serves a request."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field


class NoMatchingServer(LookupError):
    """No server block listens on the port a request arrived on."""


@dataclass
class LocationBlock:
    """Settings of a ``location`` block inside a server block."""

    path: str = "/"
    root: str = ""
    alias: str = ""
    index: list[str] = field(default_factory=list)
    autoindex: bool = False
    return_directives: dict[int, str] = field(default_factory=dict)


@dataclass
class ServerBlock:
    """Settings of a ``server`` block: where it listens and what it serves."""

    listen: list[tuple[str, int]] = field(default_factory=list)
    server_names: list[str] = field(default_factory=list)
    root: str = ""
    index: list[str] = field(default_factory=list)
    error_pages: dict[int, str] = field(default_factory=dict)
    return_directives: dict[int, str] = field(default_factory=dict)
    locations: list[LocationBlock] = field(default_factory=list)

    @property
    def ports(self) -> list[int]:
        """The ports this block listens on, in configuration order."""
        return [port for _, port in self.listen]


def match_server(
    servers: Sequence[ServerBlock], headers: Mapping[str, str], port: int
) -> ServerBlock:
    """Pick the server block for a request received on ``port``.

    A block whose server name equals the Host header (without its port) and
    which listens on ``port`` wins at once; otherwise the first block that
    listens on ``port`` is used. Raises ValueError when the Host header is
    missing and NoMatchingServer when no block listens on ``port``.
    """
    if "Host" not in headers:
        raise ValueError("Missing Host Header")
    host_name = headers["Host"].partition(":")[0]

    fallback: ServerBlock | None = None
    for server in servers:
        listens_on_port = port in server.ports
        if listens_on_port and host_name in server.server_names:
            return server
        if listens_on_port and fallback is None:
            fallback = server

    if fallback is None:
        raise NoMatchingServer("No matching server block found for the request")
    return fallback


def bind_addresses(servers: Iterable[ServerBlock]) -> list[tuple[str, int]]:
    """Return each distinct ``(ip, port)`` pair once, in order of first appearance.

    Blocks sharing an address are virtual hosts on a single listening socket.
    """
    seen: dict[tuple[str, int], None] = {}
    for server in servers:
        for address in server.listen:
            seen.setdefault(address, None)
    return list(seen)