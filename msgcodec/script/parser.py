"""
Script parser - converts escape-syntax text to command entries.

Supports the authoring syntax used by translators:

```
Hey {VII} complex!{:scale 34}Bigger{:reset}
Press {button-circle} to continue.
```

- Plain characters are literal text.
- `{:name}` or `{:name 34}` is a named command with an optional decimal
  argument.
- `{KEY}` is a symbolic token: a complex glyph such as a roman numeral, or
  an icon name.
"""

from __future__ import annotations

import re
from typing import Optional

from msgcodec.core.entry import CommandEntry, MessageCommand
from msgcodec.core.errors import ParseError
from msgcodec.tables.database import TableSet, default_tables


OPEN = '{'
CLOSE = '}'
COMMAND_PREFIX = ':'


class ScriptParser:
    """
    Parses escape-syntax scripts in a single pass.

    Any error aborts the whole parse; no partial entry list is returned.
    """

    # Regex patterns
    COMMAND_PATTERN = re.compile(r'^:([A-Za-z_][A-Za-z0-9_]*)(?:\s+(\S+))?\s*$')
    DECIMAL_PATTERN = re.compile(r'^[0-9]+$')

    def __init__(self, tables: Optional[TableSet] = None):
        self.tables = tables or default_tables()

    def parse(self, script: str) -> list[CommandEntry]:
        """Parse a script string into an ordered entry list."""
        entries: list[CommandEntry] = []
        pos = 0
        length = len(script)

        while pos < length:
            open_at = script.find(OPEN, pos)
            close_at = script.find(CLOSE, pos)

            if close_at != -1 and (open_at == -1 or close_at < open_at):
                raise ParseError("Unexpected '}' outside of a token", close_at, CLOSE)

            # Literal run up to the next token, or to the end
            if open_at == -1:
                entries.append(CommandEntry.print_text(script[pos:]))
                break
            if open_at > pos:
                entries.append(CommandEntry.print_text(script[pos:open_at]))

            if close_at == -1:
                raise ParseError("Unterminated token, expected '}'", open_at, script[open_at:])

            nested = script.find(OPEN, open_at + 1, close_at)
            if nested != -1:
                raise ParseError(
                    "Unexpected '{' inside a token", nested, script[open_at:close_at + 1]
                )

            entries.append(self._parse_token(script[open_at + 1:close_at], open_at))
            pos = close_at + 1

        return entries

    def _parse_token(self, content: str, position: int) -> CommandEntry:
        token = OPEN + content + CLOSE
        if content.startswith(COMMAND_PREFIX):
            return self._parse_command(content, position, token)
        return self._parse_symbol(content, position, token)

    def _parse_command(self, content: str, position: int, token: str) -> CommandEntry:
        match = self.COMMAND_PATTERN.match(content)
        if not match:
            raise ParseError(f"Malformed command {token}", position, token)

        name, argument = match.group(1), match.group(2)
        spec = self.tables.commands.by_name(name)
        if spec is None:
            raise ParseError(f"Unknown command {name!r}", position, token)

        if not spec.has_argument:
            if argument is not None:
                raise ParseError(f"Command {name!r} takes no argument", position, token)
            return CommandEntry(command=spec.command)

        if argument is None:
            raise ParseError(f"Command {name!r} requires an argument", position, token)
        if not self.DECIMAL_PATTERN.match(argument):
            raise ParseError(f"Argument {argument!r} is not a decimal number", position, token)

        value = int(argument)
        if value > spec.max_argument:
            raise ParseError(
                f"Argument {value} does not fit in {spec.width} byte(s)", position, token
            )

        return CommandEntry(command=spec.command, data=spec.argument_to_bytes(value))

    def _parse_symbol(self, content: str, position: int, token: str) -> CommandEntry:
        commands = self.tables.commands
        if commands.is_complex(content):
            return CommandEntry(command=MessageCommand.PRINT_COMPLEX, text=content)

        icon_id = commands.icon_id(content)
        if icon_id is not None:
            return CommandEntry.print_icon(icon_id)

        raise ParseError(f"Unknown symbol {token}", position, token)


def parse_script(script: str, tables: Optional[TableSet] = None) -> list[CommandEntry]:
    """Parse an escape-syntax script with the given (or default) tables."""
    return ScriptParser(tables).parse(script)
