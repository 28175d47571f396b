"""Parts of a small HTTP/1.1 server: helpers, listening sockets, virtual hosts and response bytes."""

__version__ = "0.1.0"