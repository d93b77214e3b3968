#!/usr/bin/env python3
"""
Entry point for the CHUK Tonality MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging
import os
from pathlib import Path

from chuk_mcp_tonality.constants import OUTPUT_DIR_ENV

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the server."""
    parser = argparse.ArgumentParser(description="CHUK Tonality MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help=f"Directory for exported MIDI/YAML files (default: ${OUTPUT_DIR_ENV} or ./output)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.output_dir is not None:
        os.environ[OUTPUT_DIR_ENV] = str(args.output_dir)

    # Import after argument parsing so the server is built once, with these options
    from chuk_mcp_tonality.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Tonality MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Tonality MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
