"""
Table database.

Handles loading and validation of the character and command tables the
codec consults. Tables are JSON assets checked against JSON Schemas.

Layout under the data path:
    schemas/characters.schema.json
    schemas/commands.schema.json
    schemas/symbols.schema.json
    data/characters.json
    data/commands.json
    data/symbols.json
"""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from msgcodec.core.config import DEFAULT_DATA_PATH
from msgcodec.core.entry import MessageCommand
from msgcodec.core.errors import TableError
from msgcodec.tables.charset import CharacterTable
from msgcodec.tables.opcodes import CommandSpec, CommandTable


def parse_byte(value: str) -> int:
    """Convert an asset byte literal such as "0x1A" to an int."""
    return int(value, 16)


@dataclass(frozen=True)
class TableSet:
    """The character and command tables used together by every codec."""
    characters: CharacterTable
    commands: CommandTable

    def __post_init__(self):
        glyph_codes = self.characters.codes()
        for code in self.commands.complex_codes():
            if code in glyph_codes:
                raise TableError(f"Complex glyph code {code.hex(' ').upper()} is also a character")
            if len(code) == 2 and code[0] not in self.characters.prefixes:
                raise TableError(f"Complex glyph code {code.hex(' ').upper()} has no escape prefix")
            if len(code) == 1 and code[0] in self.characters.prefixes:
                raise TableError(f"Complex glyph code 0x{code[0]:02X} is an escape prefix")
        for spec in self.commands.commands():
            if bytes([spec.opcode]) in glyph_codes or spec.opcode in self.characters.prefixes:
                raise TableError(f"Opcode 0x{spec.opcode:02X} is also a character code")
        if bytes([self.commands.terminator]) in glyph_codes:
            raise TableError("Terminator byte is also a character code")


class TableDatabase:
    """
    Loads table assets from disk into a TableSet.
    """

    CATEGORIES = ("characters", "commands", "symbols")

    def __init__(self, data_path: Path | str = DEFAULT_DATA_PATH):
        self._data_path = Path(data_path)
        self._schemas: dict[str, Any] = {}
        self._documents: dict[str, Any] = {}

        self.logger = logging.getLogger(__name__)

    def load_all(self) -> TableSet:
        """Load, validate and build every table."""
        self._load_schemas()
        for category in self.CATEGORIES:
            self._documents[category] = self._load_category(category)

        tables = TableSet(
            characters=self._build_characters(self._documents["characters"]),
            commands=self._build_commands(self._documents["commands"], self._documents["symbols"]),
        )
        self.logger.info(
            f"Loaded {len(tables.characters)} characters, "
            f"{len(tables.commands.commands())} commands "
            f"from {self._data_path}"
        )
        return tables

    def _load_schemas(self) -> None:
        """Load JSON schemas."""
        schema_dir = self._data_path / "schemas"
        if not schema_dir.exists():
            self.logger.error(f"Schema directory not found: {schema_dir}")
            raise TableError(f"Schema directory not found: {schema_dir}")

        for schema_file in schema_dir.glob("*.schema.json"):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load schema {schema_file}: {e}")
                raise TableError(f"Failed to load schema {schema_file}: {e}") from e

    def _load_category(self, category: str) -> dict[str, Any]:
        """Load and validate one table document."""
        file_path = self._data_path / "data" / f"{category}.json"
        schema = self._schemas.get(f"{category}.schema.json")
        if schema is None:
            self.logger.error(f"No schema found for {category}")
            raise TableError(f"No schema found for {category}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Failed to load {file_path}: {e}")
            raise TableError(f"Failed to load {file_path}: {e}") from e

        try:
            jsonschema.validate(instance=data, schema=schema)
        except jsonschema.ValidationError as e:
            self.logger.error(f"Validation error in {file_path}: {e.message}")
            raise TableError(f"Validation error in {file_path}: {e.message}") from e

        return data

    def _build_characters(self, data: dict[str, Any]) -> CharacterTable:
        return CharacterTable.from_ranges(
            data["id"],
            ranges=[(parse_byte(r["start"]), r["chars"]) for r in data["ranges"]],
            escaped=[
                (parse_byte(r["prefix"]), parse_byte(r["start"]), r["chars"])
                for r in data.get("escaped", [])
            ],
            prefixes=[parse_byte(p) for p in data.get("prefixes", [])],
        )

    def _build_commands(self, data: dict[str, Any], symbols: dict[str, Any]) -> CommandTable:
        specs = []
        for row in data["commands"]:
            try:
                command = MessageCommand[row["command"]]
            except KeyError:
                raise TableError(f"Unknown command {row['command']!r} in command table") from None
            specs.append(CommandSpec(
                command=command,
                opcode=parse_byte(row["opcode"]),
                width=row["width"],
                name=row.get("name"),
            ))

        complex_glyphs = [
            (row["key"], bytes(parse_byte(b) for b in row["code"]))
            for row in symbols["complex"]
        ]
        return CommandTable(
            data["id"],
            terminator=parse_byte(data["terminator"]),
            commands=specs,
            complex_glyphs=complex_glyphs,
            icons=symbols["icons"],
        )


@lru_cache(maxsize=None)
def default_tables() -> TableSet:
    """Process-wide tables loaded from the packaged assets."""
    return TableDatabase(DEFAULT_DATA_PATH).load_all()


def load_tables(data_path: Path | str | None = None) -> TableSet:
    """Tables from data_path, or the packaged defaults when it is None."""
    if data_path is None:
        return default_tables()
    return TableDatabase(data_path).load_all()
