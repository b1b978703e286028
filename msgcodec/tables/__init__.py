"""
Character and command tables.

Provides:
- CharacterTable: characters to glyph bytes and back
- CommandTable: opcodes, argument widths, complex glyphs and icons
- TableDatabase: JSON asset loading with schema validation
"""

from msgcodec.tables.charset import CharacterTable
from msgcodec.tables.database import TableDatabase, TableSet, default_tables, load_tables
from msgcodec.tables.opcodes import CommandSpec, CommandTable

__all__ = [
    "CharacterTable",
    "CommandSpec",
    "CommandTable",
    "TableDatabase",
    "TableSet",
    "default_tables",
    "load_tables",
]
