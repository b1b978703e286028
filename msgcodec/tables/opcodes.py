"""
Command table - opcodes, argument widths and symbolic tokens.

Named commands appear in scripts as `{:name}` or `{:name 34}`. Symbolic
tokens appear as `{VII}` (complex glyphs) or `{item-key}` (icons).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Optional, Sequence

from msgcodec.core.entry import MessageCommand, Payload
from msgcodec.core.errors import TableError


@dataclass(frozen=True)
class CommandSpec:
    """
    One row of the command table.

    Attributes:
        command: Command this row describes
        opcode: Byte that introduces the command in a binary stream
        width: Number of argument bytes following the opcode
        name: Script name used by `{:name}`, None if the command has none
    """
    command: MessageCommand
    opcode: int
    width: int
    name: Optional[str] = None

    @property
    def has_argument(self) -> bool:
        return self.width > 0

    def argument_to_bytes(self, value: int) -> bytes:
        """Little-endian wire form of a numeric argument."""
        return value.to_bytes(self.width, 'little')

    def argument_from_bytes(self, data: bytes) -> int:
        return int.from_bytes(data, 'little')

    @property
    def max_argument(self) -> int:
        return (1 << (8 * self.width)) - 1


class CommandTable:
    """
    Read-only lookup of commands and symbolic tokens.

    Lookups are plain dict reads, so one instance can be shared between
    threads without locking.
    """

    def __init__(
        self,
        table_id: str,
        terminator: int,
        commands: Iterable[CommandSpec],
        complex_glyphs: Iterable[tuple[str, bytes]] = (),
        icons: Sequence[str] = (),
    ):
        self.id = table_id
        self.terminator = terminator

        by_command: dict[MessageCommand, CommandSpec] = {}
        by_opcode: dict[int, CommandSpec] = {}
        by_name: dict[str, CommandSpec] = {}
        for spec in commands:
            if spec.command in by_command:
                raise TableError(f"Command {spec.command.name} is defined twice")
            if spec.opcode in by_opcode or spec.opcode == terminator:
                raise TableError(f"Opcode 0x{spec.opcode:02X} is assigned twice")
            if spec.name is not None:
                if spec.name in by_name:
                    raise TableError(f"Command name {spec.name!r} is used twice")
                by_name[spec.name] = spec
            if spec.command.payload is Payload.TEXT:
                raise TableError(f"{spec.command.name} is a text command and has no opcode")
            if (spec.command.payload is Payload.DATA) != spec.has_argument:
                raise TableError(f"{spec.command.name} has the wrong argument width {spec.width}")
            by_command[spec.command] = spec
            by_opcode[spec.opcode] = spec

        for required in (MessageCommand.NEW_LINE, MessageCommand.PRINT_ICON):
            if required not in by_command:
                raise TableError(f"Command table has no entry for {required.name}")

        complex_codes: dict[str, bytes] = {}
        complex_keys: dict[bytes, str] = {}
        for key, code in complex_glyphs:
            if key in complex_codes:
                raise TableError(f"Complex glyph {key!r} is defined twice")
            if code in complex_keys:
                raise TableError(f"Complex glyph code {code.hex(' ').upper()} is assigned twice")
            if len(code) == 1 and code[0] in by_opcode:
                raise TableError(f"Complex glyph {key!r} collides with an opcode")
            complex_codes[key] = code
            complex_keys[code] = key

        icon_ids: dict[str, int] = {}
        for icon_id, icon in enumerate(icons):
            if icon in icon_ids:
                raise TableError(f"Icon {icon!r} is defined twice")
            if icon in complex_codes:
                raise TableError(f"Icon {icon!r} shadows a complex glyph")
            icon_ids[icon] = icon_id

        self._by_command = MappingProxyType(by_command)
        self._by_opcode = MappingProxyType(by_opcode)
        self._by_name = MappingProxyType(by_name)
        self._complex_codes = MappingProxyType(complex_codes)
        self._complex_keys = MappingProxyType(complex_keys)
        self._icon_ids = MappingProxyType(icon_ids)
        self._icons = tuple(icons)

    # Commands

    def spec_for(self, command: MessageCommand) -> Optional[CommandSpec]:
        return self._by_command.get(command)

    def by_opcode(self, opcode: int) -> Optional[CommandSpec]:
        return self._by_opcode.get(opcode)

    def by_name(self, name: str) -> Optional[CommandSpec]:
        return self._by_name.get(name)

    @property
    def newline_opcode(self) -> int:
        return self._by_command[MessageCommand.NEW_LINE].opcode

    def commands(self) -> list[CommandSpec]:
        return list(self._by_command.values())

    # Symbolic tokens

    def complex_code(self, key: str) -> Optional[bytes]:
        return self._complex_codes.get(key)

    def complex_key(self, code: bytes) -> Optional[str]:
        return self._complex_keys.get(code)

    def is_complex(self, key: str) -> bool:
        return key in self._complex_codes

    def icon_id(self, name: str) -> Optional[int]:
        return self._icon_ids.get(name)

    def icon_name(self, icon_id: int) -> Optional[str]:
        if 0 <= icon_id < len(self._icons):
            return self._icons[icon_id]
        return None

    def complex_codes(self) -> frozenset[bytes]:
        return frozenset(self._complex_keys)
