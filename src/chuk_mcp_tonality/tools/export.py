"""
Export tools - MCP tools for MIDI and YAML export.

Tools for writing a key signature to a MIDI file and the
full key catalog to YAML.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_tonality.constants import ErrorMessages, SuccessMessages
from chuk_mcp_tonality.core import Tonality
from chuk_mcp_tonality.export import build_key_catalog, dump_key_catalog, tonality_to_midi

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_export_tools(
    mcp: ChukMCPServer,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        output_dir: Directory for output files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_export_key_midi(
        key: str,
        output_name: str | None = None,
        tempo: int = 120,
    ) -> str:
        """
        Write a key's signature to a MIDI file.

        The file holds a key_signature meta event and the tonic
        sustained for one bar, ready to open in any DAW.

        Args:
            key: Key name (e.g. 'Eb major', 'C#m')
            output_name: Optional output filename (without .mid extension)
            tempo: Tempo in BPM (default: 120)

        Returns:
            JSON string with the file path

        Example:
            music_export_key_midi(key="Eb major")
        """
        try:
            try:
                tonality = Tonality.parse(key)
            except ValueError as e:
                raise ValueError(ErrorMessages.INVALID_KEY.format(key=key)) from e

            if not tonality.is_valid_key():
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.UNCONVENTIONAL_KEY.format(key=tonality),
                    }
                )

            default_name = str(tonality).replace(" ", "_").replace("#", "sharp")
            output_path = output_dir / f"{output_name or default_name}.mid"
            output_dir.mkdir(parents=True, exist_ok=True)

            tonality_to_midi(tonality, tempo_bpm=tempo).save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "midi_key": tonality.to_midi_key(),
                    "message": SuccessMessages.KEY_MIDI_EXPORTED.format(
                        key=tonality, path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export key to MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_export_key_midi"] = music_export_key_midi

    @mcp.tool  # type: ignore[arg-type]
    async def music_export_key_table(output_name: str | None = None) -> str:
        """
        Write every conventional key signature to a YAML file.

        Covers the 15 major and 15 minor keys in circle-of-fifths order,
        with accidentals for treble, bass, alto and tenor clefs.

        Args:
            output_name: Optional output filename (without .yaml extension)

        Returns:
            JSON string with the file path

        Example:
            music_export_key_table()
        """
        try:
            catalog = build_key_catalog()
            output_path = dump_key_catalog(
                catalog, output_dir / f"{output_name or 'key_signatures'}.yaml"
            )
            count = len(catalog.entries())

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "count": count,
                    "message": SuccessMessages.KEY_TABLE_EXPORTED.format(
                        count=count, path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export key table")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_export_key_table"] = music_export_key_table

    return tools
