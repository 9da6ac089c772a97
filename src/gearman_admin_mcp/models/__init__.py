"""Data models for client configuration, transaction outcomes, and decoded responses."""

from .config import ClientConfig, DEFAULT_HOSTNAME, DEFAULT_PORT, DEFAULT_TIMEOUT
from .results import ConnectFailure
from .status import FunctionStatus
from .workers import WorkerInfo
