"""Registry API for MCP packages and services."""

__version__ = "0.1.0"
