"""
Tests for the server entry point.

The real transports are not started; main() runs against a stand-in
server module so the option handling can be checked.
"""

import os
import sys
import types
from pathlib import Path

import pytest

from chuk_mcp_tonality.constants import OUTPUT_DIR_ENV
from chuk_mcp_tonality.server import build_parser, main


class FakeServer:
    """Records which transport was started."""

    def __init__(self):
        self.started: str | None = None

    async def run_stdio(self) -> None:
        self.started = "stdio"

    async def run_http(self, port: int) -> None:
        self.started = f"http:{port}"


@pytest.fixture
def fake_server(monkeypatch):
    """Stand-in for the async_server module, and a clean output dir variable."""
    server = FakeServer()
    module = types.ModuleType("chuk_mcp_tonality.async_server")
    module.mcp = server
    monkeypatch.setitem(sys.modules, "chuk_mcp_tonality.async_server", module)

    # setenv first so the variable is removed again after the test
    monkeypatch.setenv(OUTPUT_DIR_ENV, "unset")
    monkeypatch.delenv(OUTPUT_DIR_ENV)
    return server


class TestParser:
    """Tests for command-line options."""

    def test_defaults(self) -> None:
        """stdio on port 8000 with the default output dir."""
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000
        assert args.output_dir is None
        assert args.debug is False

    def test_output_dir(self) -> None:
        """--output-dir is read as a path."""
        args = build_parser().parse_args(["--output-dir", "exports"])
        assert args.output_dir == Path("exports")


class TestMain:
    """Tests for main()."""

    def test_stdio(self, fake_server) -> None:
        """stdio is the default transport."""
        main([])
        assert fake_server.started == "stdio"
        assert OUTPUT_DIR_ENV not in os.environ

    def test_http(self, fake_server) -> None:
        """http runs on the requested port."""
        main(["--transport", "http", "--port", "9001"])
        assert fake_server.started == "http:9001"

    def test_output_dir_set_before_server_import(self, fake_server, temp_dir: Path) -> None:
        """--output-dir reaches the server through the environment."""
        main(["--output-dir", str(temp_dir)])
        assert os.environ[OUTPUT_DIR_ENV] == str(temp_dir)
        assert fake_server.started == "stdio"


class TestOutputDir:
    """Tests for the export directory lookup."""

    def test_environment_override(self, monkeypatch, temp_dir: Path) -> None:
        """The environment variable wins over ./output."""
        from chuk_mcp_tonality.async_server import get_output_dir

        monkeypatch.setenv(OUTPUT_DIR_ENV, str(temp_dir))
        assert get_output_dir() == temp_dir

    def test_default(self, monkeypatch) -> None:
        """Without the variable, exports go to ./output."""
        from chuk_mcp_tonality.async_server import BASE_PATH, get_output_dir

        monkeypatch.delenv(OUTPUT_DIR_ENV, raising=False)
        assert get_output_dir() == BASE_PATH / "output"
