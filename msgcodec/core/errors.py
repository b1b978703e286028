"""
Codec error kinds.

- ParseError: malformed script or document (an authoring mistake)
- EncodingError: a character, symbol, opcode or byte with no table entry
- TableError: the table assets themselves are unusable
"""

from __future__ import annotations

from typing import Any, Optional


class CodecError(Exception):
    """Base class for every error raised by msgcodec."""


class ParseError(CodecError):
    """
    Malformed escape-syntax script or document.

    Attributes:
        position: Character offset in the script (None for documents)
        token: Offending substring, when there is one
    """

    def __init__(self, message: str, position: Optional[int] = None, token: Optional[str] = None):
        self.message = message
        self.position = position
        self.token = token
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class EncodingError(CodecError):
    """
    A table lookup failed while encoding or decoding.

    Attributes:
        position: Entry index when encoding, byte offset when decoding
        value: The character, key or byte that had no table entry
    """

    def __init__(self, message: str, position: Optional[int] = None, value: Any = None):
        self.message = message
        self.position = position
        self.value = value
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at {self.position})"


class TableError(CodecError):
    """Character or command table assets are missing or invalid."""
