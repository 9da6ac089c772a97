"""Process settings for the MCP server, read from ``GEARMAN_*`` environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.config import ClientConfig


class GearmanAdminSettings(BaseSettings):
    """Server address, timeout, and log level for the MCP entry point."""

    model_config = SettingsConfigDict(env_prefix="GEARMAN_")

    hostname: str = "localhost"
    port: int = 4730
    timeout: float = 1.0

    log_level: str = "INFO"

    def client_config(self) -> ClientConfig:
        return ClientConfig(self.hostname, self.port, self.timeout)
