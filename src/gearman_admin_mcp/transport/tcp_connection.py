"""TCP connection to the server's admin port.

One connection carries exactly one command. The server does not frame its
responses, so every read is bounded by the connection timeout and a timed
out read is reported the same way as end of stream.
"""

from __future__ import annotations

import logging
import socket

from ..errors import TransportFault
from ..models.results import ConnectFailure

logger = logging.getLogger(__name__)

MAX_LINE_LENGTH = 1024
ENCODING = "utf-8"


class TCPConnection:
    """Manages a single admin-port socket.

    Usage::

        conn = open_connection("localhost", 4730, 1.0)
        if isinstance(conn, ConnectFailure):
            ...
        conn.write("status")
        line = conn.read_line()
        conn.close()
    """

    def __init__(self, sock: socket.socket, timeout: float) -> None:
        sock.settimeout(timeout)
        self._socket = sock
        self._reader = sock.makefile("rb")
        self._timeout = timeout
        self._connected = True
        # Last chunk stopped at MAX_LINE_LENGTH without its newline
        self._mid_line = False

    @property
    def connected(self) -> bool:
        return self._connected

    def write(self, line: str) -> None:
        """Send ``line`` followed by a newline.

        Raises:
            TransportFault: If not connected or the send fails.
        """
        if not self._connected:
            raise TransportFault("Not connected to server")
        try:
            self._socket.sendall((line + "\n").encode("ascii"))
        except OSError as e:
            raise TransportFault(f"Writing request to socket failed: {e}") from e

    def read_line(self) -> str | None:
        """Read one line, without its line ending.

        Lines longer than ``MAX_LINE_LENGTH`` bytes come back in pieces. A
        line ending that arrives alone after a full-length piece belongs to
        that piece and is not returned as an empty line.

        Returns:
            The line, or None on end of stream or if the read timed out.

        Raises:
            TransportFault: If not connected or the read fails for any
                other reason.
        """
        if not self._connected:
            raise TransportFault("Not connected to server")
        while True:
            try:
                data = self._reader.readline(MAX_LINE_LENGTH)
            except socket.timeout:
                logger.debug("Read timed out after %ss", self._timeout)
                return None
            except OSError as e:
                raise TransportFault(f"Reading of socket failed: {e}") from e
            if not data:
                return None
            continuation = self._mid_line
            self._mid_line = not data.endswith(b"\n")
            if continuation and data in (b"\n", b"\r\n"):
                continue
            return data.decode(ENCODING, errors="replace").rstrip("\r\n")

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        if not self._connected:
            return
        try:
            self._reader.close()
            self._socket.close()
        except OSError as e:
            logger.warning("Error closing socket: %s", e)
        finally:
            self._connected = False
            logger.debug("Disconnected")

    def __enter__(self) -> TCPConnection:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open_connection(
    hostname: str, port: int, timeout: float
) -> TCPConnection | ConnectFailure:
    """Connect to ``hostname:port`` within ``timeout`` seconds.

    Returns:
        An open ``TCPConnection``, or a ``ConnectFailure`` carrying the
        system error text if the server is refused, unreachable, or slow.
    """
    try:
        sock = socket.create_connection((hostname, port), timeout=timeout)
    except OSError as e:
        reason = str(e) or e.__class__.__name__
        logger.warning("Could not connect to %s:%s: %s", hostname, port, reason)
        return ConnectFailure(reason=reason)
    logger.debug("Connected to %s:%s", hostname, port)
    return TCPConnection(sock, timeout)
