"""
Key tools - MCP tools for keys and key signatures.

Tools for listing conventional keys, validating a key name,
and querying the key signature of a key in a clef.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tonality.constants import DEFAULT_CLEF, MAJOR, MINOR, ErrorMessages
from chuk_mcp_tonality.core import Note, Tonality
from chuk_mcp_tonality.models.key import TonalityInfo

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _parse_key(key: str) -> Tonality:
    try:
        return Tonality.parse(key)
    except ValueError as e:
        raise ValueError(ErrorMessages.INVALID_KEY.format(key=key)) from e


def register_key_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register key and key signature tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_keys(mode: str = MAJOR) -> str:
        """
        List the conventionally notated keys of a mode.

        Keys come in circle-of-fifths order: the natural key first,
        then keys adding sharps, then keys adding flats.

        Args:
            mode: 'M' for major, 'm' for minor

        Returns:
            JSON string with the keys and their signatures

        Example:
            music_list_keys(mode="m")
        """
        try:
            if mode not in (MAJOR, MINOR):
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_MODE.format(mode=mode)}
                )

            keys = Tonality.get_valid_keys(mode)
            return json.dumps(
                {
                    "status": "success",
                    "mode": "major" if mode == MAJOR else "minor",
                    "keys": [
                        {
                            **TonalityInfo.from_tonality(key).model_dump(),
                            "signature": str(key.get_key_signature()),
                            "accidentals": key.accidental_count(),
                        }
                        for key in keys
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to list keys")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_list_keys"] = music_list_keys

    @mcp.tool  # type: ignore[arg-type]
    async def music_validate_key(key: str) -> str:
        """
        Check whether a key is conventionally notated.

        G major and A# minor are valid; G# major and Db minor are not,
        because they would need double accidentals.

        Args:
            key: Key name (e.g. 'F# minor', 'Bb_major', 'C#m')

        Returns:
            JSON string with validity and the relative key (null if it cannot be spelled)

        Example:
            music_validate_key(key="G# major")
        """
        try:
            tonality = _parse_key(key)
            relative = tonality.relative()

            return json.dumps(
                {
                    "status": "success",
                    "key": TonalityInfo.from_tonality(tonality).model_dump(),
                    "relative": (
                        TonalityInfo.from_tonality(relative).model_dump() if relative else None
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to validate key")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_validate_key"] = music_validate_key

    @mcp.tool  # type: ignore[arg-type]
    async def music_get_key_signature(key: str, clef: str = DEFAULT_CLEF.value) -> str:
        """
        Get the key signature of a key.

        Accidentals are listed in the order they are written on the staff,
        each with the octave it is engraved at in the clef.

        Args:
            key: Key name (e.g. 'A major', 'Eb minor')
            clef: 'treble', 'bass', 'alto' or 'tenor' (default: treble)

        Returns:
            JSON string with the key signature

        Example:
            music_get_key_signature(key="A major", clef="alto")
        """
        try:
            tonality = _parse_key(key)
            signature = tonality.get_key_signature(clef)

            return json.dumps(
                {
                    "status": "success",
                    "key": str(tonality),
                    "valid": tonality.is_valid_key(),
                    "clef": clef,
                    "accidentals": [str(note) for note in signature.get_accidentals()],
                    "count": len(signature),
                    "sharps": signature.has_sharps(),
                    "flats": signature.has_flats(),
                    "signature": str(signature),
                }
            )
        except Exception as e:
            logger.exception("Failed to get key signature")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_get_key_signature"] = music_get_key_signature

    @mcp.tool  # type: ignore[arg-type]
    async def music_check_note(key: str, note: str, letter_only: bool = True) -> str:
        """
        Check whether a note is affected by a key's signature.

        With letter_only, any accidental on the same letter counts
        (Fb is "in" G major, whose signature holds F#).

        Args:
            key: Key name (e.g. 'G major')
            note: Note name (e.g. 'F#5', 'Bb')
            letter_only: Compare letters only (default: True)

        Returns:
            JSON string with the membership result

        Example:
            music_check_note(key="G major", note="Fb4", letter_only=False)
        """
        try:
            tonality = _parse_key(key)
            try:
                parsed = Note.parse(note)
            except ValueError as e:
                raise ValueError(ErrorMessages.INVALID_NOTE.format(note=note)) from e

            signature = tonality.get_key_signature()
            return json.dumps(
                {
                    "status": "success",
                    "key": str(tonality),
                    "note": str(parsed),
                    "letter_only": letter_only,
                    "in_key_signature": signature.is_in_key_signature(parsed, letter_only),
                    "applied_accidental": signature.accidental_map()[parsed.letter],
                }
            )
        except Exception as e:
            logger.exception("Failed to check note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_check_note"] = music_check_note

    return tools
