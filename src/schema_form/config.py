"""
Configuration module for schema-form.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class SchemaFormConfig:
    """Configuration settings for schema-form."""

    # Logging
    log_level: str = "INFO"

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8080

    # Form sessions kept in memory by the MCP server
    max_sessions: int = 100

    # Output settings
    indent_json_output: int = 2

    @classmethod
    def from_env(cls) -> "SchemaFormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            log_level=os.getenv("SCHEMA_FORM_LOG_LEVEL", _defaults.log_level).upper(),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_host=os.getenv("MCP_HOST", _defaults.mcp_host),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
            max_sessions=int(os.getenv("SCHEMA_FORM_MAX_SESSIONS", str(_defaults.max_sessions))),
            indent_json_output=int(os.getenv("SCHEMA_FORM_INDENT_JSON", str(_defaults.indent_json_output))),
        )


config = SchemaFormConfig.from_env()


def get_config() -> SchemaFormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> SchemaFormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
