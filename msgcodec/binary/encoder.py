"""
Binary encoder - packs command entries into the renderer's opcode stream.

Stream layout:
- Literal text is one glyph code per character (one or two bytes each).
- A command is its opcode followed by exactly `width` argument bytes.
- A single 0x00 terminator ends the message. There is no length prefix.
"""

from __future__ import annotations

from typing import Iterable, Optional

from msgcodec.core.entry import CommandEntry, MessageCommand, Payload
from msgcodec.core.errors import EncodingError
from msgcodec.tables.database import TableSet, default_tables


class MessageEncoder:
    """
    Encodes entry lists to null-terminated byte strings.

    Usage:
        encoder = MessageEncoder()
        data = encoder.encode(parse_script("{:scale 22}hey{:reset}"))
        # b'\\x0a\\x16\\xa1\\x9e\\xb2\\x03\\x00'
    """

    def __init__(self, tables: Optional[TableSet] = None):
        self.tables = tables or default_tables()

    def encode(self, entries: Iterable[CommandEntry]) -> bytes:
        out = bytearray()
        for index, entry in enumerate(entries):
            self._encode_entry(entry, index, out)
        out.append(self.tables.commands.terminator)
        return bytes(out)

    def _encode_entry(self, entry: CommandEntry, index: int, out: bytearray) -> None:
        command = entry.command

        if command is MessageCommand.PRINT_TEXT:
            self._encode_text(entry.text, index, out)
            return

        if command is MessageCommand.PRINT_COMPLEX:
            code = self.tables.commands.complex_code(entry.text)
            if code is None:
                raise EncodingError(f"Unknown complex glyph {entry.text!r}", index, entry.text)
            out += code
            return

        spec = self.tables.commands.spec_for(command)
        if spec is None:
            raise EncodingError(f"Command {command.name} has no opcode", index, command)

        out.append(spec.opcode)
        if command.payload is Payload.DATA:
            if len(entry.data) != spec.width:
                raise EncodingError(
                    f"{command.name} expects {spec.width} argument byte(s), got {len(entry.data)}",
                    index,
                    entry.data,
                )
            out += entry.data

    def _encode_text(self, text: str, index: int, out: bytearray) -> None:
        characters = self.tables.characters
        for char in text:
            if char == '\n':
                out.append(self.tables.commands.newline_opcode)
                continue
            code = characters.encode_char(char)
            if code is None:
                raise EncodingError(f"Character {char!r} has no glyph", index, char)
            out += code


def encode_message(entries: Iterable[CommandEntry], tables: Optional[TableSet] = None) -> bytes:
    """Encode entries to a terminated binary message."""
    return MessageEncoder(tables).encode(entries)
