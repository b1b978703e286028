"""
Canonical message model.

Every representation of a message (escape-syntax script, binary opcode
stream, XML document) converts to and from an ordered list of
CommandEntry values.

Usage:
    entries = [
        CommandEntry(command=MessageCommand.PRINT_TEXT, text="Hey "),
        CommandEntry(command=MessageCommand.PRINT_COMPLEX, text="VII"),
        CommandEntry(command=MessageCommand.TEXT_SCALE, data=b"\\x22"),
        CommandEntry(command=MessageCommand.RESET),
    ]
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class Payload(Enum):
    """Which CommandEntry field a command reads."""
    NONE = auto()
    TEXT = auto()
    DATA = auto()


class MessageCommand(Enum):
    """Message commands understood by the text renderer."""
    PRINT_TEXT = auto()
    PRINT_COMPLEX = auto()
    PRINT_ICON = auto()
    NEW_LINE = auto()
    RESET = auto()
    THEME = auto()
    UNKNOWN_05 = auto()
    UNKNOWN_06 = auto()
    COLOR = auto()
    UNKNOWN_08 = auto()
    TEXT_SCALE = auto()
    TEXT_WIDTH = auto()
    LINE_SPACING = auto()
    UNKNOWN_0D = auto()
    UNKNOWN_0E = auto()
    UNKNOWN_0F = auto()
    CLEAR = auto()
    POSITION = auto()
    UNKNOWN_12 = auto()
    UNKNOWN_13 = auto()
    DELAY = auto()
    CHAR_DELAY = auto()
    UNKNOWN_16 = auto()
    DELAY_AND_FADE = auto()
    UNKNOWN_18 = auto()

    @property
    def payload(self) -> Payload:
        if self in (MessageCommand.PRINT_TEXT, MessageCommand.PRINT_COMPLEX):
            return Payload.TEXT
        if self in _NO_PAYLOAD:
            return Payload.NONE
        return Payload.DATA


_NO_PAYLOAD = frozenset({
    MessageCommand.NEW_LINE,
    MessageCommand.RESET,
    MessageCommand.CLEAR,
    MessageCommand.UNKNOWN_0D,
})


class CommandEntry(BaseModel):
    """
    One unit of a message.

    Attributes:
        command: Which command this entry renders
        text: Literal text (PRINT_TEXT) or symbolic key (PRINT_COMPLEX)
        data: Raw argument bytes, already in wire form

    Entries are frozen; build a new one instead of editing.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    command: MessageCommand
    text: Optional[str] = None
    data: Optional[bytes] = None

    @model_validator(mode='after')
    def _check_payload(self) -> CommandEntry:
        payload = self.command.payload
        if payload is Payload.TEXT:
            if self.text is None:
                raise ValueError(f"{self.command.name} requires text")
            if self.data is not None:
                raise ValueError(f"{self.command.name} does not take data")
        elif payload is Payload.DATA:
            if self.data is None:
                raise ValueError(f"{self.command.name} requires data")
            if self.text is not None:
                raise ValueError(f"{self.command.name} does not take text")
        elif self.command is not MessageCommand.NEW_LINE:
            # NewLine tolerates a stray payload; it always renders as a line break
            if self.text is not None or self.data is not None:
                raise ValueError(f"{self.command.name} takes no payload")
        return self

    @classmethod
    def print_text(cls, text: str) -> CommandEntry:
        return cls(command=MessageCommand.PRINT_TEXT, text=text)

    @classmethod
    def print_complex(cls, key: str) -> CommandEntry:
        return cls(command=MessageCommand.PRINT_COMPLEX, text=key)

    @classmethod
    def print_icon(cls, icon_id: int) -> CommandEntry:
        return cls(command=MessageCommand.PRINT_ICON, data=bytes([icon_id]))

    @classmethod
    def new_line(cls) -> CommandEntry:
        return cls(command=MessageCommand.NEW_LINE)


# Ordered entries; order is render order
Message = list[CommandEntry]
