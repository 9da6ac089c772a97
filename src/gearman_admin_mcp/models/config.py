"""Connection parameters and their validation."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from ..errors import ConfigurationError

DEFAULT_HOSTNAME = "localhost"
DEFAULT_PORT = 4730
DEFAULT_TIMEOUT = 1.0
# socket.settimeout overflows on very large values
MAX_TIMEOUT = 86400.0


def validate_hostname(hostname: object) -> str:
    if not isinstance(hostname, str):
        raise ConfigurationError(
            f"Expected hostname to be of type str, got {type(hostname).__name__}"
        )
    if not hostname:
        raise ConfigurationError("Hostname must not be empty")
    return hostname


def validate_port(port: object) -> int:
    # bool is an int subclass; True is not a port.
    if isinstance(port, bool) or not isinstance(port, int):
        raise ConfigurationError(
            f"Expected port to be an integer, got {type(port).__name__}"
        )
    if not 1 <= port <= 65535:
        raise ConfigurationError(f"Port must be 1-65535, got {port}")
    return port


def validate_timeout(timeout: object) -> float:
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigurationError(
            f"Expected timeout to be numeric, got {type(timeout).__name__}"
        )
    if isinstance(timeout, float) and not math.isfinite(timeout):
        raise ConfigurationError(f"Timeout must be finite, got {timeout}")
    if not timeout > 0:
        raise ConfigurationError(f"Timeout must be positive, got {timeout}")
    if timeout > MAX_TIMEOUT:
        raise ConfigurationError(
            f"Timeout must be at most {MAX_TIMEOUT:g} seconds, got {timeout}"
        )
    return float(timeout)


@dataclass(frozen=True)
class ClientConfig:
    """Validated, immutable connection parameters for one transaction."""

    hostname: str = DEFAULT_HOSTNAME
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        validate_hostname(self.hostname)
        validate_port(self.port)
        # Normalise ints to float without tripping the frozen guard
        object.__setattr__(self, "timeout", validate_timeout(self.timeout))

    def with_hostname(self, hostname: str) -> ClientConfig:
        return replace(self, hostname=hostname)

    def with_port(self, port: int) -> ClientConfig:
        return replace(self, port=port)

    def with_timeout(self, timeout: float) -> ClientConfig:
        return replace(self, timeout=timeout)

    def to_dict(self) -> dict:
        return {"hostname": self.hostname, "port": self.port, "timeout": self.timeout}
