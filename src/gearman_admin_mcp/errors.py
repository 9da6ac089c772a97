"""Exception hierarchy for the admin protocol client.

Connect failures are deliberately absent: an unreachable server is a
routine outcome and is reported as a :class:`~.models.ConnectFailure`
value instead of an exception.
"""

from __future__ import annotations


class GearmanAdminError(Exception):
    """Base class for all admin client errors."""


class ConfigurationError(GearmanAdminError, ValueError):
    """An invalid hostname, port, or timeout was supplied."""


class ProtocolError(GearmanAdminError):
    """The server answered with an ``ERR <code> <message>`` line."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"Server returned error: {code}: {message}")
        self.code = code
        self.message = message


class TransportFault(GearmanAdminError):
    """The connection broke after it was established."""


class MalformedResponseError(GearmanAdminError):
    """A response could not be decoded into a result."""
