"""CORS middleware configuration for the MCP HTTP app."""

import os

from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware

# MCP Inspector
DEFAULT_ORIGINS = "http://localhost:6274"


def allowed_origins() -> list[str]:
    """Origins from the comma separated CORS_ORIGINS variable."""
    configured = os.getenv("CORS_ORIGINS", DEFAULT_ORIGINS)
    return [origin.strip() for origin in configured.split(",") if origin.strip()]


def get_cors_middleware() -> Middleware:
    """
    Create the CORS middleware for the streamable HTTP endpoint.

    Returns:
        Middleware: CORSMiddleware exposing the MCP session header
    """
    return Middleware(
        CORSMiddleware,
        allow_origins=allowed_origins(),
        allow_methods=["POST", "OPTIONS", "GET", "DELETE"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id"],
        allow_credentials=True,
    )
