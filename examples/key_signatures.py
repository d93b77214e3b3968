#!/usr/bin/env python3
"""
Example: Print key signatures and write them as MIDI files.

This walks the circle of fifths for both modes, prints each key's
signature in every clef, and writes one MIDI file per key.

Usage:
    python examples/key_signatures.py
    # Creates: examples/output/<key>.mid and examples/output/key_signatures.yaml
"""

from pathlib import Path

from chuk_mcp_tonality.constants import Clef
from chuk_mcp_tonality.core import Note, Tonality
from chuk_mcp_tonality.export import build_key_catalog, dump_key_catalog, tonality_to_midi


def main() -> None:
    """Print and export every conventional key."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    for mode in ("M", "m"):
        print(f"\n{'Major' if mode == 'M' else 'Minor'} keys:")
        for key in Tonality.get_valid_keys(mode):
            views = "  ".join(
                f"{clef.value}={key.get_key_signature(clef.value) or '-'}" for clef in Clef
            )
            print(f"  {key!s:<10} {views}")

            filename = str(key).replace(" ", "_").replace("#", "sharp")
            tonality_to_midi(key).save(str(output_dir / f"{filename}.mid"))

    # Keys nobody writes can still be built and inspected
    print("\nUnconventional:")
    for key in (Tonality(Note("G", "#"), True), Tonality(Note("D", "b"), False)):
        print(f"  {key}: valid={key.is_valid_key()}, relative={key.relative()}")

    path = dump_key_catalog(build_key_catalog(), output_dir / "key_signatures.yaml")
    print(f"\nCatalog written to {path}")


if __name__ == "__main__":
    main()
