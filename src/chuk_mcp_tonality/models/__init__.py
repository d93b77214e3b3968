"""
Pydantic models for the tonality system.

This module provides:
- TonalityInfo: A key summarized for display
- KeySignatureInfo: A key signature in every clef
- KeyCatalog: All conventional keys with their signatures
"""

from chuk_mcp_tonality.models.key import KeyCatalog, KeySignatureInfo, TonalityInfo

__all__ = [
    "KeyCatalog",
    "KeySignatureInfo",
    "TonalityInfo",
]
