"""Client for the job server's administrative protocol.

Each command opens its own connection, sends one request line, collects
the response and closes the connection before returning. Nothing is
shared between commands.
"""

from __future__ import annotations

import logging

from .models.config import (
    ClientConfig,
    DEFAULT_HOSTNAME,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    validate_hostname,
    validate_port,
    validate_timeout,
)
from .models.results import ConnectFailure
from .models.status import FunctionStatus
from .models.workers import WorkerInfo
from .protocol.commands import (
    build_max_queue,
    build_shutdown,
    build_status,
    build_version,
    build_workers,
)
from .protocol.framing import read_response
from .protocol.parser import parse_ok, parse_status, parse_version, parse_workers
from .transport.tcp_connection import open_connection

logger = logging.getLogger(__name__)


class GearmanAdmin:
    """Administrative client for a single job server.

    Usage::

        admin = GearmanAdmin("localhost", 4730, timeout=1)
        status = admin.status()
        if isinstance(status, ConnectFailure):
            print("server down:", status.reason)

    Every command returns a ``ConnectFailure`` instead of its result when
    the server cannot be reached. ``ProtocolError`` and ``TransportFault``
    are raised.
    """

    def __init__(
        self,
        hostname: str = DEFAULT_HOSTNAME,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._hostname = validate_hostname(hostname)
        self._port = validate_port(port)
        self._timeout = validate_timeout(timeout)
        self._last_error: str | None = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> GearmanAdmin:
        return cls(config.hostname, config.port, config.timeout)

    @property
    def hostname(self) -> str:
        return self._hostname

    @hostname.setter
    def hostname(self, value: str) -> None:
        self._hostname = validate_hostname(value)

    @property
    def port(self) -> int:
        return self._port

    @port.setter
    def port(self, value: int) -> None:
        self._port = validate_port(value)

    @property
    def timeout(self) -> float:
        """Connect timeout and per-line read timeout, in seconds."""
        return self._timeout

    @timeout.setter
    def timeout(self, value: float) -> None:
        self._timeout = validate_timeout(value)

    @property
    def config(self) -> ClientConfig:
        return ClientConfig(self._hostname, self._port, self._timeout)

    @property
    def last_error(self) -> str | None:
        """System error text from the most recent failed connect, if any."""
        return self._last_error

    # ─── COMMANDS ─────────────────────────────────────────────────────

    def status(self) -> dict[str, FunctionStatus] | ConnectFailure:
        """Registered functions with their queued, running and worker counts."""
        lines = self.send_command(build_status())
        if isinstance(lines, ConnectFailure):
            return lines
        return parse_status(lines)

    def version(self) -> str | ConnectFailure:
        lines = self.send_command(build_version())
        if isinstance(lines, ConnectFailure):
            return lines
        return parse_version(lines)

    def workers(self) -> list[WorkerInfo] | ConnectFailure:
        """Connected workers and the functions each can perform."""
        lines = self.send_command(build_workers())
        if isinstance(lines, ConnectFailure):
            return lines
        return parse_workers(lines)

    def max_queue(self, function: str, size: int | None = None) -> bool | ConnectFailure:
        """Set the maximum queue length for ``function``.

        Args:
            function: Registered function name.
            size: New limit. ``None`` restores the server default and a
                negative value removes the limit.

        Returns:
            True if the server answered ``OK``.
        """
        lines = self.send_command(build_max_queue(function, size))
        if isinstance(lines, ConnectFailure):
            return lines
        return parse_ok(lines)

    def shutdown(self, graceful: bool = False) -> bool | ConnectFailure:
        """Shut the server down.

        A graceful shutdown closes the listening socket and lets existing
        connections finish.
        """
        lines = self.send_command(build_shutdown(graceful))
        if isinstance(lines, ConnectFailure):
            return lines
        return parse_ok(lines)

    # ─── TRANSACTION ──────────────────────────────────────────────────

    def send_command(self, line: str) -> list[str] | ConnectFailure:
        """Run one request/response transaction.

        Returns:
            The collected response lines, or ``ConnectFailure``.

        Raises:
            ProtocolError: If the server answered with an ``ERR`` line.
            TransportFault: If writing or reading fails after connecting.
        """
        conn = open_connection(self._hostname, self._port, self._timeout)
        if isinstance(conn, ConnectFailure):
            self._last_error = conn.reason
            return conn
        self._last_error = None

        with conn:
            logger.debug("Sending %r to %s:%s", line, self._hostname, self._port)
            conn.write(line)
            lines = read_response(conn)
        logger.debug("Received %d line(s)", len(lines))
        return lines
