"""Tests for the MCP tool layer."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock, patch

import pytest

from gearman_admin_mcp.client import GearmanAdmin


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_instance.prompt.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
        # Remove cached server module so it re-imports with our mock
        sys.modules.pop("gearman_admin_mcp.server", None)
        import gearman_admin_mcp.server as server_mod

    return server_mod


@pytest.fixture
def server():
    server_mod = _get_server_module()
    yield server_mod
    server_mod._admin = None


def _point_at(server_mod, port: int, timeout: float = 1.0) -> None:
    server_mod._admin = GearmanAdmin("127.0.0.1", port, timeout)


def test_get_status(server, admin_server):
    gearman = admin_server("reverse\t3\t1\t2\n.\n")
    _point_at(server, gearman.port)
    assert server.get_status() == {
        "functions": [
            {"function": "reverse", "in_queue": 3, "jobs_running": 1, "capable_workers": 2}
        ]
    }


def test_get_version(server, admin_server):
    gearman = admin_server("OK 1.1.21\n")
    _point_at(server, gearman.port)
    assert server.get_version() == {"version": "1.1.21"}


def test_list_workers(server, admin_server):
    gearman = admin_server("3 127.0.0.1 client123 : func.A func.B\n.\n")
    _point_at(server, gearman.port)
    result = server.list_workers()
    assert result["workers"][0]["file_descriptor"] == 3
    assert result["workers"][0]["function_names"] == ["func.A", "func.B"]


def test_set_max_queue(server, admin_server):
    gearman = admin_server("OK\n")
    _point_at(server, gearman.port)
    assert server.set_max_queue("myfunc", 10) == {
        "function": "myfunc",
        "size": 10,
        "success": True,
    }
    assert gearman.requests == ["maxqueue myfunc 10"]


def test_set_max_queue_invalid_function(server):
    assert "error" in server.set_max_queue("two words", 1)


def test_shutdown_server(server, admin_server):
    gearman = admin_server("OK\n")
    _point_at(server, gearman.port)
    assert server.shutdown_server(graceful=True) == {"graceful": True, "success": True}
    assert gearman.requests == ["shutdown graceful"]


def test_protocol_error_payload(server, admin_server):
    gearman = admin_server("ERR UNKNOWN_COMMAND Unknown+server+command\n")
    _point_at(server, gearman.port)
    assert server.get_status() == {
        "error": "Unknown server command",
        "code": "UNKNOWN_COMMAND",
    }


def test_connect_failure_payload(server, unused_port):
    _point_at(server, unused_port, 0.5)
    result = server.get_version()
    assert result["connected"] is False
    assert result["error"]


def test_configure(server):
    _point_at(server, 4730)
    result = server.configure(hostname="gearman.internal", port=4731)
    assert result == {"hostname": "gearman.internal", "port": 4731, "timeout": 1.0}
    assert server._get_admin().hostname == "gearman.internal"


def test_configure_rejects_invalid_values(server):
    _point_at(server, 4730)
    assert "error" in server.configure(timeout=-1)
    assert server._get_admin().timeout == 1.0


def test_admin_built_from_environment(server, monkeypatch):
    monkeypatch.setenv("GEARMAN_HOSTNAME", "envhost")
    monkeypatch.setenv("GEARMAN_PORT", "5000")
    server._admin = None
    admin = server._get_admin()
    assert (admin.hostname, admin.port) == ("envhost", 5000)


def test_resource_version_is_json(server, admin_server):
    gearman = admin_server("OK 1.1.21\n")
    _point_at(server, gearman.port)
    assert json.loads(server.resource_version()) == {"version": "1.1.21"}


def test_diagnose_prompt_mentions_tools(server):
    prompt = server.diagnose_queues()
    assert "get_status" in prompt
    assert "list_workers" in prompt
