"""Response framing for the line-oriented admin protocol.

Response layout::

    ERR <code> <url-encoded message>        (error, nothing follows)

    <data line>                             (first line, always kept)
    <data line>
    ...
    .                                       (or an empty line, or silence)

The protocol has no length prefix. A response ends at a lone ``.``, at a
line that is empty once trimmed, or when a read times out. All three are
normal endings; commands such as ``version`` send one line and rely on the
timeout.
"""

from __future__ import annotations

import re
from typing import Protocol
from urllib.parse import unquote_plus

from ..errors import ProtocolError, TransportFault

TERMINATOR = "."
ERROR_LINE = re.compile(r"^ERR\s")


class LineReader(Protocol):
    def read_line(self) -> str | None: ...


def is_error_line(line: str) -> bool:
    return ERROR_LINE.match(line) is not None


def parse_error_line(line: str) -> ProtocolError:
    """Decode an ``ERR`` line into a ``ProtocolError``.

    Missing code or message tokens decode to empty strings.
    """
    tokens = line.split(None, 2)
    code = tokens[1] if len(tokens) > 1 else ""
    message = unquote_plus(tokens[2]) if len(tokens) > 2 else ""
    return ProtocolError(code=code, message=message)


def is_terminator(line: str) -> bool:
    return line == TERMINATOR or line == ""


def read_response(connection: LineReader) -> list[str]:
    """Collect one response from ``connection``.

    Returns:
        The trimmed data lines in arrival order, without the terminator.

    Raises:
        ProtocolError: If the first line is an ``ERR`` line.
        TransportFault: If the server sends nothing at all.
    """
    first = connection.read_line()
    if first is None:
        raise TransportFault("Reading of socket failed: no response from server")

    first = first.strip()
    if is_error_line(first):
        raise parse_error_line(first)

    lines = [first]
    while True:
        line = connection.read_line()
        if line is None:
            break
        line = line.strip()
        if is_terminator(line):
            break
        lines.append(line)
    return lines
