"""
Binary decoder - reads the renderer's opcode stream back into entries.

Uses the same tables as the encoder. Consecutive glyphs merge into one
PRINT_TEXT entry; every opcode becomes its own entry.
"""

from __future__ import annotations

from typing import Optional

from msgcodec.core.entry import CommandEntry, MessageCommand
from msgcodec.core.errors import EncodingError
from msgcodec.script.serializer import ScriptSerializer
from msgcodec.tables.database import TableSet, default_tables


class MessageDecoder:
    """Decodes null-terminated binary messages."""

    def __init__(self, tables: Optional[TableSet] = None):
        self.tables = tables or default_tables()

    def decode(self, data: bytes, offset: int = 0) -> list[CommandEntry]:
        entries, _ = self.read(data, offset)
        return entries

    def read(self, data: bytes, offset: int = 0) -> tuple[list[CommandEntry], int]:
        """
        Decode one message starting at offset.

        Args:
            data: Buffer holding the message
            offset: Where the message starts

        Returns:
            (entries, offset just past the terminator)
        """
        characters = self.tables.characters
        commands = self.tables.commands
        entries: list[CommandEntry] = []
        text: list[str] = []
        pos = offset
        size = len(data)

        while True:
            if pos >= size:
                raise EncodingError("Message is missing its terminator", pos)

            byte = data[pos]
            if byte == commands.terminator:
                self._flush_text(text, entries)
                return entries, pos + 1

            spec = commands.by_opcode(byte)
            if spec is not None:
                end = pos + 1 + spec.width
                if end > size:
                    raise EncodingError(f"Truncated {spec.command.name} argument", pos, byte)
                self._flush_text(text, entries)
                if spec.has_argument:
                    entries.append(CommandEntry(command=spec.command, data=bytes(data[pos + 1:end])))
                else:
                    entries.append(CommandEntry(command=spec.command))
                pos = end
                continue

            length = characters.code_length(byte)
            code = bytes(data[pos:pos + length])
            if len(code) < length:
                raise EncodingError("Truncated glyph code", pos, code)

            char = characters.decode_code(code)
            if char is not None:
                text.append(char)
                pos += length
                continue

            key = commands.complex_key(code)
            if key is not None:
                self._flush_text(text, entries)
                entries.append(CommandEntry(command=MessageCommand.PRINT_COMPLEX, text=key))
                pos += length
                continue

            raise EncodingError(f"Unassigned glyph code {code.hex(' ').upper()}", pos, code)

    def scan(self, data: bytes, offset: int = 0) -> int:
        """
        Find the end of the message starting at offset without decoding it.

        Only the layout is checked: opcode argument widths, escape-prefix
        lengths and the terminator. Unassigned glyph codes pass through and
        are reported later by read().

        Returns:
            Offset just past the terminator
        """
        commands = self.tables.commands
        code_length = self.tables.characters.code_length
        pos = offset
        size = len(data)

        while pos < size:
            byte = data[pos]
            if byte == commands.terminator:
                return pos + 1
            spec = commands.by_opcode(byte)
            pos += 1 + spec.width if spec is not None else code_length(byte)

        raise EncodingError("Message is missing its terminator", pos)

    @staticmethod
    def _flush_text(text: list[str], entries: list[CommandEntry]) -> None:
        if text:
            entries.append(CommandEntry.print_text(''.join(text)))
            text.clear()


def decode_message(data: bytes, tables: Optional[TableSet] = None) -> list[CommandEntry]:
    """Decode one terminated binary message."""
    return MessageDecoder(tables).decode(data)


def decode_text(data: bytes, tables: Optional[TableSet] = None) -> str:
    """Decode a binary message straight to escape-syntax text."""
    return ScriptSerializer(tables).serialize(MessageDecoder(tables).decode(data))
