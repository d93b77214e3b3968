"""
Tests for MCP tools.

Tests the MCP tool implementations for key queries and exports.
"""

import json
from pathlib import Path

import pytest
from mido import MidiFile

from chuk_mcp_tonality.constants import Clef
from chuk_mcp_tonality.core import Note, Tonality
from chuk_mcp_tonality.export import load_key_catalog, read_tonality
from chuk_mcp_tonality.tools.export import register_export_tools
from chuk_mcp_tonality.tools.keys import register_key_tools


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def key_tools():
    """Key tools registered on a mock server."""
    return register_key_tools(MockMCPServer("test"))


@pytest.fixture
def export_tools(temp_dir: Path):
    """Export tools writing into a temporary directory."""
    return register_export_tools(MockMCPServer("test"), temp_dir)


class TestRegistration:
    """Tests for tool registration."""

    def test_key_tools_registered(self) -> None:
        """Every key tool is registered on the server."""
        mcp = MockMCPServer("test")
        tools = register_key_tools(mcp)
        assert set(tools) == {
            "music_list_keys",
            "music_validate_key",
            "music_get_key_signature",
            "music_check_note",
        }
        assert set(mcp.tools) == set(tools)

    def test_export_tools_registered(self, temp_dir: Path) -> None:
        """Every export tool is registered on the server."""
        mcp = MockMCPServer("test")
        tools = register_export_tools(mcp, temp_dir)
        assert set(tools) == {"music_export_key_midi", "music_export_key_table"}


class TestListKeys:
    """Tests for music_list_keys."""

    @pytest.mark.asyncio
    async def test_major(self, key_tools) -> None:
        """Major keys come back in circle-of-fifths order."""
        data = json.loads(await key_tools["music_list_keys"](mode="M"))
        assert data["status"] == "success"
        assert data["mode"] == "major"
        assert len(data["keys"]) == 15
        assert data["keys"][0]["name"] == "Cn major"
        assert data["keys"][1]["signature"] == "F#5"
        assert data["keys"][8]["accidentals"] == -1

    @pytest.mark.asyncio
    async def test_minor(self, key_tools) -> None:
        """Minor keys start with A minor."""
        data = json.loads(await key_tools["music_list_keys"](mode="m"))
        assert data["keys"][0]["name"] == "An minor"
        assert data["keys"][0]["midi_key"] == "Am"

    @pytest.mark.asyncio
    async def test_invalid_mode(self, key_tools) -> None:
        """Unknown modes are reported."""
        data = json.loads(await key_tools["music_list_keys"](mode="dorian"))
        assert data["status"] == "error"
        assert "dorian" in data["message"]


class TestValidateKey:
    """Tests for music_validate_key."""

    @pytest.mark.asyncio
    async def test_valid(self, key_tools) -> None:
        """Valid keys report their relative."""
        data = json.loads(await key_tools["music_validate_key"](key="Eb major"))
        assert data["status"] == "success"
        assert data["key"]["valid"] is True
        assert data["relative"]["name"] == "Cn minor"

    @pytest.mark.asyncio
    async def test_unconventional(self, key_tools) -> None:
        """Unconventional keys parse but are flagged."""
        data = json.loads(await key_tools["music_validate_key"](key="G# major"))
        assert data["status"] == "success"
        assert data["key"]["valid"] is False
        assert data["key"]["midi_key"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["Cbb minor", "B## major"])
    async def test_unspellable_relative(self, key_tools, key: str) -> None:
        """Keys whose relative cannot be spelled are still reported."""
        data = json.loads(await key_tools["music_validate_key"](key=key))
        assert data["status"] == "success"
        assert data["key"]["valid"] is False
        assert data["relative"] is None

    @pytest.mark.asyncio
    async def test_unparseable(self, key_tools) -> None:
        """Garbage key names are errors."""
        data = json.loads(await key_tools["music_validate_key"](key="not a key"))
        assert data["status"] == "error"
        assert "Invalid key" in data["message"]


class TestGetKeySignature:
    """Tests for music_get_key_signature."""

    @pytest.mark.asyncio
    async def test_treble(self, key_tools) -> None:
        """Treble clef is the default."""
        data = json.loads(await key_tools["music_get_key_signature"](key="A major"))
        assert data["status"] == "success"
        assert data["accidentals"] == ["F#5", "C#5", "G#5"]
        assert data["signature"] == "F#5,C#5,G#5"
        assert data["sharps"] is True
        assert data["count"] == 3

    @pytest.mark.asyncio
    async def test_clef(self, key_tools) -> None:
        """Clefs change octaves only."""
        data = json.loads(
            await key_tools["music_get_key_signature"](key="Bb_major", clef="bass")
        )
        assert data["accidentals"] == ["Bb2", "Eb3"]
        assert data["flats"] is True

    @pytest.mark.asyncio
    async def test_minor(self, key_tools) -> None:
        """Minor keys use their relative major's signature."""
        data = json.loads(await key_tools["music_get_key_signature"](key="C#m", clef="alto"))
        assert data["accidentals"] == ["F#4", "C#4", "G#4", "D#4"]

    @pytest.mark.asyncio
    async def test_unknown_clef(self, key_tools) -> None:
        """Unknown clefs fall back to treble."""
        data = json.loads(await key_tools["music_get_key_signature"](key="G", clef="soprano"))
        assert data["status"] == "success"
        assert data["accidentals"] == ["F#5"]


class TestCheckNote:
    """Tests for music_check_note."""

    @pytest.mark.asyncio
    async def test_letter_only(self, key_tools) -> None:
        """Letter-only matching."""
        data = json.loads(await key_tools["music_check_note"](key="G major", note="Fb4"))
        assert data["status"] == "success"
        assert data["in_key_signature"] is True
        assert data["applied_accidental"] == "#"

    @pytest.mark.asyncio
    async def test_exact(self, key_tools) -> None:
        """Exact matching needs the accidental too."""
        data = json.loads(
            await key_tools["music_check_note"](key="G major", note="Fb4", letter_only=False)
        )
        assert data["in_key_signature"] is False

    @pytest.mark.asyncio
    async def test_invalid_note(self, key_tools) -> None:
        """Garbage note names are errors."""
        data = json.loads(await key_tools["music_check_note"](key="G major", note="Z9"))
        assert data["status"] == "error"
        assert "Invalid note" in data["message"]


class TestExportTools:
    """Tests for MIDI and YAML export tools."""

    @pytest.mark.asyncio
    async def test_export_midi(self, export_tools, temp_dir: Path) -> None:
        """The MIDI file carries the key signature."""
        data = json.loads(await export_tools["music_export_key_midi"](key="Eb minor"))
        assert data["status"] == "success"
        assert data["midi_key"] == "Ebm"

        path = Path(data["path"])
        assert path.exists()
        assert path.parent == temp_dir
        assert read_tonality(MidiFile(str(path))) == Tonality(Note("E", "b"), False)

    @pytest.mark.asyncio
    async def test_export_midi_custom_name(self, export_tools, temp_dir: Path) -> None:
        """Output names are respected."""
        data = json.loads(
            await export_tools["music_export_key_midi"](key="F# major", output_name="fsharp")
        )
        assert Path(data["path"]) == temp_dir / "fsharp.mid"

    @pytest.mark.asyncio
    async def test_export_midi_unconventional(self, export_tools) -> None:
        """Unconventional keys cannot be exported."""
        data = json.loads(await export_tools["music_export_key_midi"](key="D# major"))
        assert data["status"] == "error"
        assert "not a conventionally notated key" in data["message"]

    @pytest.mark.asyncio
    async def test_export_table(self, export_tools) -> None:
        """The YAML catalog holds all thirty keys."""
        data = json.loads(await export_tools["music_export_key_table"]())
        assert data["status"] == "success"
        assert data["count"] == 30

        catalog = load_key_catalog(Path(data["path"]))
        assert catalog.major[2].clefs[Clef.TREBLE] == ["F#5", "C#5"]
