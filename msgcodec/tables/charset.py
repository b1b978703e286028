"""
Character table - printable characters to encoded glyph bytes.

Most glyphs are one byte. Glyphs outside the base set are two bytes: an
escape prefix followed by the glyph index inside that prefix's page.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from msgcodec.core.errors import TableError


class CharacterTable:
    """
    Read-only bidirectional mapping between characters and glyph codes.

    Built once and shared; never mutated after construction.
    """

    def __init__(self, table_id: str, glyphs: Mapping[str, bytes], prefixes: Iterable[int] = ()):
        self.id = table_id
        self.prefixes = frozenset(prefixes)

        decode: dict[bytes, str] = {}
        for char, code in glyphs.items():
            if len(char) != 1:
                raise TableError(f"Glyph {char!r} must be a single character")
            self._check_code(char, code)
            if code in decode:
                raise TableError(
                    f"Glyph code {code.hex(' ').upper()} assigned to both "
                    f"{decode[code]!r} and {char!r}"
                )
            decode[code] = char

        self._encode = MappingProxyType(dict(glyphs))
        self._decode = MappingProxyType(decode)

    def _check_code(self, char: str, code: bytes) -> None:
        if len(code) == 1:
            if code[0] in self.prefixes:
                raise TableError(f"Glyph {char!r} uses escape prefix 0x{code[0]:02X} as a code")
        elif len(code) == 2:
            if code[0] not in self.prefixes:
                raise TableError(f"Glyph {char!r} has unknown escape prefix 0x{code[0]:02X}")
        else:
            raise TableError(f"Glyph {char!r} must encode to one or two bytes")

    @classmethod
    def from_ranges(
        cls,
        table_id: str,
        ranges: Iterable[tuple[int, str]],
        escaped: Iterable[tuple[int, int, str]] = (),
        prefixes: Iterable[int] = (),
    ) -> CharacterTable:
        """
        Build a table from runs of consecutive glyphs.

        Args:
            table_id: Table identifier
            ranges: (first_code, characters) pairs
            escaped: (prefix, first_code, characters) triples
            prefixes: Bytes that introduce a two-byte glyph
        """
        glyphs: dict[str, bytes] = {}

        def add(char: str, code: bytes) -> None:
            if char in glyphs:
                raise TableError(f"Character {char!r} is defined twice")
            glyphs[char] = code

        for start, chars in ranges:
            for offset, char in enumerate(chars):
                if start + offset > 0xFF:
                    raise TableError(f"Range starting at 0x{start:02X} overflows a byte")
                add(char, bytes([start + offset]))

        for prefix, start, chars in escaped:
            for offset, char in enumerate(chars):
                if start + offset > 0xFF:
                    raise TableError(f"Escaped range 0x{prefix:02X} 0x{start:02X} overflows a byte")
                add(char, bytes([prefix, start + offset]))

        return cls(table_id, glyphs, prefixes)

    def encode_char(self, char: str) -> Optional[bytes]:
        """Glyph code for a character, or None if the table has none."""
        return self._encode.get(char)

    def decode_code(self, code: bytes) -> Optional[str]:
        """Character for a glyph code, or None if unassigned."""
        return self._decode.get(code)

    def code_length(self, first_byte: int) -> int:
        """Number of bytes in the glyph code starting with first_byte."""
        return 2 if first_byte in self.prefixes else 1

    def codes(self) -> frozenset[bytes]:
        return frozenset(self._decode)

    def __contains__(self, char: object) -> bool:
        return char in self._encode

    def __len__(self) -> int:
        return len(self._encode)
