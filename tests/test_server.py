"""Tests for the server.py module."""

import importlib
import sys
from unittest.mock import Mock, patch

import pytest

import server


class TestServerInitialization:
    """Test server initialization and configuration."""

    def test_tools_registered(self):
        """Test that importing the server loads the bundled tools."""
        with patch("loader.load_tools_from_directory") as mock_loader:
            mock_loader.return_value = {"loaded": ["convert_time"], "failed": []}
            importlib.reload(server)

        assert server.app is not None

    def test_loader_failure_propagates(self):
        """Test that a failing tool loader aborts the import."""
        with patch("loader.load_tools_from_directory", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError, match="boom"):
                importlib.reload(server)

        importlib.reload(server)


class TestMainFunction:
    """Test the main() function with different modes."""

    @patch("server.mcp")
    def test_main_stdio_mode(self, mock_mcp):
        """Test main function in stdio mode."""
        with patch.object(sys, "argv", ["server.py", "stdio"]):
            with patch("builtins.print") as mock_print:
                server.main()

        mock_print.assert_called_once_with("Running MCP in stdio mode...")
        mock_mcp.run.assert_called_once()

    @pytest.mark.parametrize("argv", [["server.py", "http"], ["server.py", "sse"], ["server.py"]])
    @patch("server.uvicorn.run")
    @patch("server.app")
    def test_main_http_modes(self, mock_app, mock_uvicorn, argv, monkeypatch):
        """Test that http, sse and the default mode serve on the default address."""
        monkeypatch.delenv("MCP_HOST", raising=False)
        monkeypatch.delenv("MCP_PORT", raising=False)

        with patch.object(sys, "argv", argv):
            with patch("builtins.print") as mock_print:
                server.main()

        mock_print.assert_called_once_with("Running MCP over HTTP streaming...")
        mock_uvicorn.assert_called_once_with(mock_app, host="127.0.0.1", port=5001)

    @patch("server.uvicorn.run")
    @patch("server.app")
    def test_main_http_address_from_env(self, mock_app, mock_uvicorn, monkeypatch):
        """Test that MCP_HOST and MCP_PORT override the address."""
        monkeypatch.setenv("MCP_HOST", "0.0.0.0")
        monkeypatch.setenv("MCP_PORT", "8080")

        with patch.object(sys, "argv", ["server.py", "http"]):
            with patch("builtins.print"):
                server.main()

        mock_uvicorn.assert_called_once_with(mock_app, host="0.0.0.0", port=8080)

    def test_main_invalid_mode(self):
        """Test main function raises error for invalid mode."""
        with patch.object(sys, "argv", ["server.py", "invalid_mode"]):
            with pytest.raises(ValueError, match="Unknown mode: invalid_mode"):
                server.main()


class TestCorsMiddleware:
    """Test the CORS configuration."""

    def test_default_origin(self, monkeypatch):
        """Test that the MCP Inspector origin is allowed by default."""
        from middleware.cors import get_cors_middleware

        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        middleware = get_cors_middleware()

        assert middleware.kwargs["allow_origins"] == ["http://localhost:6274"]
        assert middleware.kwargs["expose_headers"] == ["Mcp-Session-Id"]

    def test_origins_from_env(self, monkeypatch):
        """Test the comma separated CORS_ORIGINS variable."""
        from middleware.cors import allowed_origins

        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
        assert allowed_origins() == ["https://a.example", "https://b.example"]
