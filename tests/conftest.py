"""Shared fixtures: a scripted admin-port server and an in-memory connection."""

from __future__ import annotations

import socket
import socketserver
import threading
import time

import pytest


class _ScriptedHandler(socketserver.StreamRequestHandler):
    def handle(self):
        request = self.rfile.readline().decode("ascii").rstrip("\n")
        self.server.requests.append(request)
        if self.server.response:
            self.wfile.write(self.server.response)
        if self.server.hold_open:
            time.sleep(self.server.hold_open)


class ScriptedServer(socketserver.ThreadingTCPServer):
    """Answers every connection with the same canned response."""

    daemon_threads = True
    block_on_close = False
    allow_reuse_address = True

    def __init__(self, response: bytes, hold_open: float = 0.0) -> None:
        super().__init__(("127.0.0.1", 0), _ScriptedHandler)
        self.response = response
        self.hold_open = hold_open
        self.requests: list[str] = []

    @property
    def port(self) -> int:
        return self.server_address[1]


class FakeConnection:
    """Stands in for ``TCPConnection``; ``None`` entries mean timeout/EOF."""

    def __init__(self, lines: list[str | None]) -> None:
        self._lines = list(lines)
        self.written: list[str] = []
        self.close_count = 0
        self.reads = 0

    def write(self, line: str) -> None:
        self.written.append(line)

    def read_line(self) -> str | None:
        self.reads += 1
        if not self._lines:
            return None
        return self._lines.pop(0)

    def close(self) -> None:
        self.close_count += 1

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


@pytest.fixture
def admin_server():
    """Factory starting a ``ScriptedServer`` on a free localhost port."""
    servers: list[ScriptedServer] = []

    def start(response: bytes | str, hold_open: float = 0.0) -> ScriptedServer:
        if isinstance(response, str):
            response = response.encode("ascii")
        server = ScriptedServer(response, hold_open)
        thread = threading.Thread(
            target=server.serve_forever, kwargs={"poll_interval": 0.05}, daemon=True
        )
        thread.start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def unused_port() -> int:
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def fake_connection():
    return FakeConnection
