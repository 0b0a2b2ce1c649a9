"""HTTP middleware for the MCP server."""

from middleware.cors import get_cors_middleware

__all__ = ["get_cors_middleware"]
