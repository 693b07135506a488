"""Configuration module for the Reminders Bridge.

This module provides configuration settings using Pydantic Settings.
Environment variables can be used to override default values.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings for the Reminders Bridge.

    All settings can be overridden via environment variables.
    Example: export READER_TIMEOUT=20
    """

    # Native Backend Configuration
    READER_BINARY_PATH: Optional[str] = None
    """Explicit path to the compiled reader. Default: bin/GetReminders next to this file"""

    READER_TIMEOUT: float = 10.0
    """Seconds before a reader process is killed"""

    WRITER_TIMEOUT: float = 10.0
    """Seconds before an osascript process is killed"""

    OSASCRIPT_PATH: str = "osascript"
    """Scripting interpreter used for reminder creation"""

    TEST_MODE: bool = False
    """Point the reader and the interpreter at paths that cannot run, so no OS side effects happen"""

    # MCP Server Configuration
    MCP_HOST: str = "127.0.0.1"
    """MCP server host address"""

    MCP_PORT: int = 8006
    """MCP server port for SSE transport"""

    MCP_TRANSPORT: str = "stdio"
    """MCP transport type: 'stdio' for local, 'sse' for network access"""

    # API Server Configuration
    API_HOST: str = "127.0.0.1"
    """HTTP API host address"""

    API_PORT: int = 8005
    """HTTP API port"""

    # Logging Configuration
    LOG_DIR: Optional[str] = None
    """Directory for rotating log files. Default: logs/ next to this file"""

    LOG_LEVEL: str = "INFO"
    """Level applied to file and console handlers"""

    class Config:
        """Pydantic config"""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance, read by the server entry points only
settings = Settings()
