"""
MCP tool implementations.

Tools are organized by domain:
- keys - Key listing, validation and key signature queries
- export - MIDI and YAML export tools
"""

from chuk_mcp_tonality.tools.export import register_export_tools
from chuk_mcp_tonality.tools.keys import register_key_tools

__all__ = [
    "register_export_tools",
    "register_key_tools",
]
