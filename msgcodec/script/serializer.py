"""
Script serializer - renders command entries as escape-syntax text.

The output parses back to the same entries, so scripts survive any number
of parse/serialize passes unchanged after the first.
"""

from __future__ import annotations

from typing import Iterable, Optional

from msgcodec.core.entry import CommandEntry, MessageCommand, Payload
from msgcodec.core.errors import EncodingError
from msgcodec.tables.database import TableSet, default_tables


class ScriptSerializer:
    """Renders entries with the command table's names."""

    def __init__(self, tables: Optional[TableSet] = None):
        self.tables = tables or default_tables()

    def serialize(self, entries: Iterable[CommandEntry]) -> str:
        return ''.join(self._render(entry) for entry in entries)

    def _render(self, entry: CommandEntry) -> str:
        command = entry.command

        if command is MessageCommand.PRINT_TEXT:
            return entry.text
        if command is MessageCommand.PRINT_COMPLEX:
            return '{' + entry.text + '}'
        # Any payload on a line break is ignored
        if command is MessageCommand.NEW_LINE:
            return '\n'

        commands = self.tables.commands
        if command is MessageCommand.PRINT_ICON and len(entry.data) == 1:
            name = commands.icon_name(entry.data[0])
            if name is not None:
                return '{' + name + '}'

        spec = commands.spec_for(command)
        if spec is None or spec.name is None:
            raise EncodingError(f"Command {command.name} has no script name", value=command)

        if command.payload is Payload.DATA:
            return f"{{:{spec.name} {spec.argument_from_bytes(entry.data)}}}"
        return f"{{:{spec.name}}}"


def serialize_script(entries: Iterable[CommandEntry], tables: Optional[TableSet] = None) -> str:
    """Render entries as an escape-syntax script."""
    return ScriptSerializer(tables).serialize(entries)
