"""Comprehensive tests for server.py and async_server.py."""

import os
import sys
from unittest.mock import MagicMock, patch

import pytest

from chuk_mcp_terrain.core.terrain_manager import TerrainManager


@pytest.fixture
def clean_server_import():
    """
    Remove cached server modules so each test re-imports them with the
    environment it patched in.
    """
    import chuk_mcp_terrain

    prefixes = ("chuk_mcp_terrain.server", "chuk_mcp_terrain.async_server")
    attrs = ("server", "async_server")
    saved = {k: sys.modules.pop(k) for k in list(sys.modules) if k.startswith(prefixes)}
    saved_attrs = {a: getattr(chuk_mcp_terrain, a) for a in attrs if hasattr(chuk_mcp_terrain, a)}
    for a in saved_attrs:
        delattr(chuk_mcp_terrain, a)
    yield
    for k in list(sys.modules):
        if k.startswith(prefixes):
            sys.modules.pop(k, None)
    sys.modules.update(saved)
    for a in attrs:
        if hasattr(chuk_mcp_terrain, a):
            delattr(chuk_mcp_terrain, a)
    for a, v in saved_attrs.items():
        setattr(chuk_mcp_terrain, a, v)


# =====================================================================
# _check_tile_source tests
# =====================================================================


class TestCheckTileSource:
    def test_token_template_with_token(self):
        from chuk_mcp_terrain import server

        manager = TerrainManager(
            tile_url="https://t.example.com/{z}/{x}/{y}.pngraw?access_token={token}",
            access_token="abc",
        )
        with patch("chuk_mcp_terrain.async_server.manager", manager):
            assert server._check_tile_source() is True

    def test_token_template_without_token(self, caplog, monkeypatch):
        from chuk_mcp_terrain import server

        monkeypatch.delenv("MAPBOX_ACCESS_TOKEN", raising=False)
        manager = TerrainManager(
            tile_url="https://t.example.com/{z}/{x}/{y}.pngraw?access_token={token}"
        )
        with patch("chuk_mcp_terrain.async_server.manager", manager):
            with caplog.at_level("WARNING"):
                assert server._check_tile_source() is False

        assert "MAPBOX_ACCESS_TOKEN" in caplog.text

    def test_tokenless_template(self, monkeypatch):
        from chuk_mcp_terrain import server

        monkeypatch.delenv("MAPBOX_ACCESS_TOKEN", raising=False)
        manager = TerrainManager(tile_url="http://localhost:9000/{z}/{x}/{y}.png")
        with patch("chuk_mcp_terrain.async_server.manager", manager):
            assert server._check_tile_source() is True


# =====================================================================
# main() transport selection
# =====================================================================


class TestMainStdioMode:
    def test_stdio_mode_calls_mcp_run_stdio(self, clean_server_import):
        mock_mcp = MagicMock(name="mcp")

        with patch.dict(os.environ, {}, clear=True):
            from chuk_mcp_terrain import server

            server.mcp = mock_mcp

            with patch("sys.argv", ["server", "stdio"]):
                server.main()

        mock_mcp.run.assert_called_once_with(stdio=True)


class TestMainHttpMode:
    def test_http_mode_calls_mcp_run_with_host_port(self, clean_server_import):
        mock_mcp = MagicMock(name="mcp")

        with patch.dict(os.environ, {}, clear=True):
            from chuk_mcp_terrain import server

            server.mcp = mock_mcp

            with patch("sys.argv", ["server", "http", "--host", "0.0.0.0", "--port", "9000"]):
                server.main()

        mock_mcp.run.assert_called_once_with(host="0.0.0.0", port=9000, stdio=False)

    def test_default_host_and_port(self, clean_server_import):
        mock_mcp = MagicMock(name="mcp")

        with patch.dict(os.environ, {}, clear=True):
            from chuk_mcp_terrain import server

            server.mcp = mock_mcp

            with patch("sys.argv", ["server", "http"]):
                server.main()

        mock_mcp.run.assert_called_once_with(host="localhost", port=8004, stdio=False)


class TestMainAutoDetect:
    def test_auto_detect_stdio_when_mcp_stdio_env_set(self, clean_server_import):
        mock_mcp = MagicMock(name="mcp")

        with patch.dict(os.environ, {"MCP_STDIO": "1"}, clear=True):
            from chuk_mcp_terrain import server

            server.mcp = mock_mcp

            with patch("sys.argv", ["server"]):
                server.main()

        mock_mcp.run.assert_called_once_with(stdio=True)

    def test_auto_detect_stdio_when_stdin_not_tty(self, clean_server_import):
        mock_mcp = MagicMock(name="mcp")

        with patch.dict(os.environ, {}, clear=True):
            from chuk_mcp_terrain import server

            server.mcp = mock_mcp

            with patch("sys.argv", ["server"]), patch("sys.stdin") as mock_stdin:
                mock_stdin.isatty.return_value = False
                server.main()

        mock_mcp.run.assert_called_once_with(stdio=True)

    def test_auto_detect_http_when_tty(self, clean_server_import):
        mock_mcp = MagicMock(name="mcp")

        with patch.dict(os.environ, {}, clear=True):
            from chuk_mcp_terrain import server

            server.mcp = mock_mcp

            with (
                patch("sys.argv", ["server", "--port", "7777"]),
                patch("sys.stdin") as mock_stdin,
            ):
                mock_stdin.isatty.return_value = True
                server.main()

        mock_mcp.run.assert_called_once_with(host="localhost", port=7777, stdio=False)


class TestMainChecksTileSource:
    def test_check_called(self, clean_server_import):
        with patch.dict(os.environ, {}, clear=True):
            from chuk_mcp_terrain import server

            server.mcp = MagicMock()

            with (
                patch.object(server, "_check_tile_source") as mock_check,
                patch("sys.argv", ["server", "stdio"]),
            ):
                server.main()

            mock_check.assert_called_once()


# =====================================================================
# async_server.py tests
# =====================================================================


class TestAsyncServerMCPInstance:
    def test_mcp_is_chuk_mcp_server_instance(self):
        from chuk_mcp_server import ChukMCPServer

        from chuk_mcp_terrain.async_server import mcp

        assert isinstance(mcp, ChukMCPServer)

    def test_mcp_name(self):
        from chuk_mcp_terrain.async_server import mcp

        assert mcp.server_info.name == "chuk-mcp-terrain"

    def test_manager_is_terrain_manager_instance(self):
        from chuk_mcp_terrain.async_server import manager

        assert isinstance(manager, TerrainManager)


class TestServerModuleImport:
    def test_mcp_from_server_is_same_as_async_server(self, clean_server_import):
        from chuk_mcp_terrain import server

        async_server = sys.modules["chuk_mcp_terrain.async_server"]
        assert server.mcp is async_server.mcp
