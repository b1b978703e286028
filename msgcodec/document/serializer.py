"""
Document serializer - XML form of messages for localization tooling.

A message becomes one element per entry:

```
<message id="12345">
  <text>Hey </text>
  <complex value="VII" />
  <scale value="34" />
  <icon value="item-consumable" />
  <newline />
  <reset />
</message>
```

Icons are written by name, never by number, so an icon ID without a name
in the command table cannot be written.
"""

from __future__ import annotations

import copy
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Mapping, Optional

from msgcodec.core.entry import CommandEntry, MessageCommand, Payload
from msgcodec.core.errors import EncodingError, ParseError
from msgcodec.tables.database import TableSet, default_tables


MESSAGE_TAG = "message"
CATALOG_TAG = "messages"
TEXT_TAG = "text"
COMPLEX_TAG = "complex"
ICON_TAG = "icon"
NEWLINE_TAG = "newline"
ID_ATTR = "id"
VALUE_ATTR = "value"

# Characters an XML 1.0 document cannot hold, even as references
XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")

logger = logging.getLogger(__name__)


class DocumentSerializer:
    """
    Converts entry lists to and from XML elements.
    """

    def __init__(self, tables: Optional[TableSet] = None):
        self.tables = tables or default_tables()

    # Writing

    def serialize(self, message_id: int, entries: Iterable[CommandEntry]) -> ET.Element:
        """Build a <message> element for one message."""
        root = ET.Element(MESSAGE_TAG, {ID_ATTR: str(message_id)})
        for index, entry in enumerate(entries):
            root.append(self._entry_element(entry, index))
        return root

    def serialize_catalog(self, messages: Mapping[int, Iterable[CommandEntry]]) -> ET.Element:
        """Build a <messages> element holding every message in order."""
        root = ET.Element(CATALOG_TAG)
        for message_id, entries in messages.items():
            root.append(self.serialize(message_id, entries))
        return root

    def _entry_element(self, entry: CommandEntry, index: int) -> ET.Element:
        command = entry.command
        commands = self.tables.commands

        if command is MessageCommand.PRINT_TEXT:
            bad = XML_INVALID_CHARS.search(entry.text)
            if bad is not None:
                raise EncodingError(f"Character {bad.group()!r} cannot be written to XML", index, bad.group())
            element = ET.Element(TEXT_TAG)
            element.text = entry.text
            return element
        if command is MessageCommand.PRINT_COMPLEX:
            return ET.Element(COMPLEX_TAG, {VALUE_ATTR: entry.text})
        if command is MessageCommand.NEW_LINE:
            return ET.Element(NEWLINE_TAG)
        if command is MessageCommand.PRINT_ICON:
            name = commands.icon_name(entry.data[0]) if len(entry.data) == 1 else None
            if name is None:
                raise EncodingError(f"Icon {entry.data.hex(' ').upper()} has no name", index, entry.data)
            return ET.Element(ICON_TAG, {VALUE_ATTR: name})

        spec = commands.spec_for(command)
        if spec is None or spec.name is None:
            raise EncodingError(f"Command {command.name} has no document name", index, command)
        if command.payload is Payload.DATA:
            return ET.Element(spec.name, {VALUE_ATTR: str(spec.argument_from_bytes(entry.data))})
        return ET.Element(spec.name)

    # Reading

    def deserialize(self, element: ET.Element) -> tuple[int, list[CommandEntry]]:
        """Read a <message> element back to (message_id, entries)."""
        if element.tag != MESSAGE_TAG:
            raise ParseError(f"Expected <{MESSAGE_TAG}>, found <{element.tag}>", token=element.tag)

        raw_id = element.get(ID_ATTR)
        if raw_id is None or not raw_id.strip().isdecimal():
            raise ParseError(f"Message has a missing or invalid id {raw_id!r}", token=raw_id)
        message_id = int(raw_id)

        entries = []
        for child in element:
            entry = self._read_entry(child, message_id)
            if entry is not None:
                entries.append(entry)
        return message_id, entries

    def deserialize_catalog(self, root: ET.Element) -> dict[int, list[CommandEntry]]:
        """Read a <messages> element; any bad message aborts the read."""
        if root.tag != CATALOG_TAG:
            raise ParseError(f"Expected <{CATALOG_TAG}>, found <{root.tag}>", token=root.tag)

        messages: dict[int, list[CommandEntry]] = {}
        for child in root:
            message_id, entries = self.deserialize(child)
            if message_id in messages:
                raise ParseError(f"Message {message_id} appears twice", token=str(message_id))
            messages[message_id] = entries
        return messages

    def _read_entry(self, element: ET.Element, message_id: int) -> Optional[CommandEntry]:
        tag = element.tag
        commands = self.tables.commands

        if tag == TEXT_TAG:
            # Empty text elements carry nothing to render
            if not element.text:
                return None
            return CommandEntry.print_text(element.text)

        if tag == NEWLINE_TAG:
            return CommandEntry.new_line()

        if tag == COMPLEX_TAG:
            key = self._required_value(element, message_id)
            if not commands.is_complex(key):
                raise ParseError(f"Message {message_id}: unknown complex glyph {key!r}", token=key)
            return CommandEntry(command=MessageCommand.PRINT_COMPLEX, text=key)

        if tag == ICON_TAG:
            name = self._required_value(element, message_id)
            icon_id = commands.icon_id(name)
            if icon_id is None:
                raise ParseError(f"Message {message_id}: unknown icon {name!r}", token=name)
            return CommandEntry.print_icon(icon_id)

        spec = commands.by_name(tag)
        if spec is None:
            raise ParseError(f"Message {message_id}: unknown element <{tag}>", token=tag)

        if not spec.has_argument:
            if element.get(VALUE_ATTR) is not None:
                raise ParseError(f"Message {message_id}: <{tag}> takes no value", token=tag)
            return CommandEntry(command=spec.command)

        raw = self._required_value(element, message_id)
        if not raw.isdecimal() or int(raw) > spec.max_argument:
            raise ParseError(f"Message {message_id}: invalid <{tag}> value {raw!r}", token=raw)
        return CommandEntry(command=spec.command, data=spec.argument_to_bytes(int(raw)))

    @staticmethod
    def _required_value(element: ET.Element, message_id: int) -> str:
        value = element.get(VALUE_ATTR)
        if value is None:
            raise ParseError(
                f"Message {message_id}: <{element.tag}> is missing its {VALUE_ATTR} attribute",
                token=element.tag,
            )
        return value


def to_string(element: ET.Element, pretty: bool = False) -> str:
    """Serialize an element to a unicode XML string."""
    if pretty:
        element = copy.deepcopy(element)
        ET.indent(element)
    # XML readers fold a raw CR into LF; a character reference survives
    return ET.tostring(element, encoding="unicode").replace("\r", "&#13;")


def save_document(
    element: ET.Element,
    path: str | Path,
    encoding: str = "utf-8",
    pretty: bool = True,
) -> None:
    """Write an element tree to an XML file with a declaration."""
    path = Path(path)
    text = f"<?xml version='1.0' encoding='{encoding}'?>\n" + to_string(element, pretty)
    path.write_bytes(text.encode(encoding, "xmlcharrefreplace"))
    logger.info(f"Wrote document {path}")


def load_document(path: str | Path) -> ET.Element:
    """Read an XML file and return its root element."""
    try:
        return ET.parse(Path(path)).getroot()
    except ET.ParseError as e:
        # The expat message already names the line and column
        raise ParseError(f"Malformed XML in {path}: {e}") from e
