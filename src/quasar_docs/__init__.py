"""MCP server for the Quasar Framework documentation."""

__version__ = "1.0.0"
