#!/usr/bin/env python3
"""
Async Tonality MCP Server using chuk-mcp-server

This server provides MCP tools for keys and key signatures in
Western tonal harmony.

The server provides tools for:
- Listing the conventionally notated major and minor keys
- Validating key names and finding relative keys
- Key signatures in treble, bass, alto and tenor clefs
- Checking whether a note is affected by a key signature
- Exporting key signatures to MIDI and the key catalog to YAML
"""

import logging
import os
from pathlib import Path
from typing import Any

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_tonality.constants import OUTPUT_DIR_ENV
from chuk_mcp_tonality.tools import register_export_tools, register_key_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Paths - use standard project structure
BASE_PATH = Path.cwd()


def get_output_dir() -> Path:
    """Export directory: $CHUK_TONALITY_OUTPUT_DIR if set, else ./output."""
    return Path(os.environ.get(OUTPUT_DIR_ENV) or BASE_PATH / "output")


OUTPUT_DIR = get_output_dir()


def create_server(output_dir: Path = OUTPUT_DIR) -> tuple[ChukMCPServer, dict[str, Any]]:
    """
    Create the MCP server with every tool registered.

    Args:
        output_dir: Directory for exported MIDI and YAML files

    Returns:
        The server and a dictionary of its tool functions
    """
    server = ChukMCPServer("chuk-mcp-tonality")
    tools = {
        **register_key_tools(server),
        **register_export_tools(server, output_dir),
    }
    logger.info("CHUK Tonality MCP Server initialized")
    logger.info(f"  Output dir: {output_dir}")
    return server, tools


# Create the MCP server instance
mcp, tools = create_server()

# Export tool functions for direct access
music_list_keys = tools["music_list_keys"]
music_validate_key = tools["music_validate_key"]
music_get_key_signature = tools["music_get_key_signature"]
music_check_note = tools["music_check_note"]

music_export_key_midi = tools["music_export_key_midi"]
music_export_key_table = tools["music_export_key_table"]
