"""Non-blocking TCP listening sockets."""

from __future__ import annotations

import socket


class ListeningSocket:
    """An IPv4 TCP socket bound to ``ip:port``, listening and non-blocking."""

    def __init__(self, port: int, ip: str, backlog: int = 10) -> None:
        self.ip = ip
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._sock.setblocking(False)
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            try:
                self._sock.bind((ip, port))
            except OSError as exc:
                raise OSError(f"Bind failed for {ip}:{port}: {exc}") from exc
            try:
                self._sock.listen(backlog)
            except OSError as exc:
                raise OSError(f"Listen failed for {ip}:{port}: {exc}") from exc
        except BaseException:
            self._sock.close()
            raise
        self.port: int = self._sock.getsockname()[1]

    def fileno(self) -> int:
        """Return the socket's file descriptor, or -1 once closed."""
        return self._sock.fileno()

    def accept(self) -> tuple[socket.socket, tuple[str, int]]:
        """Accept a pending connection; raises BlockingIOError if none is waiting."""
        return self._sock.accept()

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        self._sock.close()

    def __enter__(self) -> ListeningSocket:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()