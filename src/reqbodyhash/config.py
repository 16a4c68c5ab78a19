"""ReqBodyHash Configuration Management."""

from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    """Configuration for the MCP host adapter."""
    name: str = Field(default="reqbodyhash", description="MCP server name")
    resolve_tool_name: str = Field(
        default="resolve_request",
        description="Name of the MCP tool that runs the request hooks",
    )


class LoggingConfig(BaseModel):
    """Configuration for process-level logging."""
    level: str = Field(default="INFO", description="Root log level")
    format: str = Field(
        default="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        description="logging.basicConfig format string",
    )


class ReqBodyHashConfig(BaseModel):
    """Root configuration for ReqBodyHash."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# Global default config
_config: ReqBodyHashConfig | None = None


def get_config() -> ReqBodyHashConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ReqBodyHashConfig()
    return _config


def set_config(config: ReqBodyHashConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
