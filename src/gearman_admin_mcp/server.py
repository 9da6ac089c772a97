"""MCP server entry point for job server administration.

Exposes the admin protocol commands as tools, resources, and prompts via
the Model Context Protocol using the official Python MCP SDK with stdio
transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .client import GearmanAdmin
from .config import GearmanAdminSettings
from .errors import (
    ConfigurationError,
    MalformedResponseError,
    ProtocolError,
    TransportFault,
)
from .models.results import ConnectFailure

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "gearman-admin",
    instructions="MCP server for inspecting and controlling a Gearman job server",
)

# Global client state
_admin: GearmanAdmin | None = None


def _get_admin() -> GearmanAdmin:
    """Get the configured client, building it from the environment on first use."""
    global _admin
    if _admin is None:
        _admin = GearmanAdmin.from_config(GearmanAdminSettings().client_config())
    return _admin


def _run(command, *args) -> tuple[Any, dict[str, Any] | None]:
    """Run a client command.

    Returns:
        ``(result, None)`` on success, or ``(None, error_payload)`` if the
        server was unreachable or the transaction failed.
    """
    admin = _get_admin()
    try:
        result = command(admin, *args)
    except ProtocolError as e:
        return None, {"error": e.message, "code": e.code}
    except (TransportFault, MalformedResponseError) as e:
        return None, {"error": str(e)}
    if isinstance(result, ConnectFailure):
        return None, {"connected": False, "error": result.reason}
    return result, None


# ─── CONFIGURATION TOOLS ──────────────────────────────────────────────

@mcp.tool()
def configure(
    hostname: str | None = None,
    port: int | None = None,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Point the client at a different server.

    Args:
        hostname: Server hostname or IP address.
        port: Admin port (default 4730).
        timeout: Connect and per-line read timeout in seconds.
    """
    config = _get_admin().config
    try:
        if hostname is not None:
            config = config.with_hostname(hostname)
        if port is not None:
            config = config.with_port(port)
        if timeout is not None:
            config = config.with_timeout(timeout)
    except ConfigurationError as e:
        return {"error": str(e)}

    global _admin
    _admin = GearmanAdmin.from_config(config)
    return config.to_dict()


# ─── INTROSPECTION TOOLS ──────────────────────────────────────────────

@mcp.tool()
def get_status() -> dict[str, Any]:
    """List registered functions with queued jobs, running jobs, and capable workers."""
    result, error = _run(GearmanAdmin.status)
    if error:
        return error
    return {"functions": [entry.to_dict() for entry in result.values()]}


@mcp.tool()
def get_version() -> dict[str, Any]:
    """Retrieve the server version string."""
    result, error = _run(GearmanAdmin.version)
    if error:
        return error
    return {"version": result}


@mcp.tool()
def list_workers() -> dict[str, Any]:
    """List connected workers with their host, job handle, and functions."""
    result, error = _run(GearmanAdmin.workers)
    if error:
        return error
    return {"workers": [worker.to_dict() for worker in result]}


# ─── CONTROL TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def set_max_queue(function: str, size: int | None = None) -> dict[str, Any]:
    """Set the maximum queue length for a function.

    Args:
        function: Registered function name.
        size: New limit. Omit to restore the server default; negative means unlimited.
    """
    try:
        result, error = _run(GearmanAdmin.max_queue, function, size)
    except ValueError as e:
        return {"error": str(e)}
    if error:
        return error
    return {"function": function, "size": size, "success": result}


@mcp.tool()
def shutdown_server(graceful: bool = False) -> dict[str, Any]:
    """Shut the server down.

    Args:
        graceful: Stop accepting connections but let existing ones complete.
    """
    result, error = _run(GearmanAdmin.shutdown, graceful)
    if error:
        return error
    return {"graceful": graceful, "success": result}


# ─── MCP RESOURCES ────────────────────────────────────────────────────

@mcp.resource("gearman://server/status")
def resource_status() -> str:
    """Function queue status."""
    return json.dumps(get_status())


@mcp.resource("gearman://server/workers")
def resource_workers() -> str:
    """Connected workers."""
    return json.dumps(list_workers())


@mcp.resource("gearman://server/version")
def resource_version() -> str:
    """Server version."""
    return json.dumps(get_version())


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def diagnose_queues() -> str:
    """Guide the AI through finding backed-up or unserved functions."""
    return """Read the queue state using the get_status tool and the worker list using list_workers.
Look for:
- Functions with queued jobs but zero capable workers
- Functions whose queue is much longer than their worker count
- Workers registered for functions nobody submits to

Summarize the problems found. Use set_max_queue only if the user asks to cap a queue."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    settings = GearmanAdminSettings()
    logging.basicConfig(level=settings.log_level.upper())
    global _admin
    _admin = GearmanAdmin.from_config(settings.client_config())
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
