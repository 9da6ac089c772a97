"""Transport layer: one TCP connection per admin command."""

from .tcp_connection import TCPConnection, open_connection, MAX_LINE_LENGTH
