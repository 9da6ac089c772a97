"""Admin command names and request-line builders.

Every request is a single ASCII line; the transport appends the newline.
"""

from __future__ import annotations

from enum import Enum


class Command(str, Enum):
    """Admin protocol command words."""

    STATUS = "status"
    VERSION = "version"
    WORKERS = "workers"
    MAXQUEUE = "maxqueue"
    SHUTDOWN = "shutdown"


GRACEFUL = "graceful"


def build_command(command: Command, *args: str) -> str:
    """Join a command word and its arguments into a request line."""
    return " ".join([command.value, *args])


def build_status() -> str:
    return build_command(Command.STATUS)


def build_version() -> str:
    return build_command(Command.VERSION)


def build_workers() -> str:
    return build_command(Command.WORKERS)


def build_max_queue(function: str, size: int | None = None) -> str:
    """Build a ``maxqueue`` request.

    Args:
        function: Registered function name.
        size: Maximum queue length. ``None`` sends an empty token, which the
            server reads as "use the default". Negative sizes mean unlimited
            to the server and are passed through unchanged.
    """
    if not function or any(ch.isspace() for ch in function):
        raise ValueError(f"Function name must be a non-empty word, got {function!r}")
    if not function.isascii():
        raise ValueError(f"Function name must be ASCII, got {function!r}")
    if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
        raise ValueError(f"Queue size must be an integer, got {size!r}")
    return build_command(Command.MAXQUEUE, function, "" if size is None else str(size))


def build_shutdown(graceful: bool = False) -> str:
    if graceful:
        return build_command(Command.SHUTDOWN, GRACEFUL)
    return build_command(Command.SHUTDOWN)
