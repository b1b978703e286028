"""
Message catalog - the binary container keyed by numeric message ID.

Layout (little-endian):
- <uint32 magic = 1><uint32 count>
- count entries of <uint32 id><uint32 offset>, offsets from file start
- the null-terminated messages; identical messages are stored once
"""

from __future__ import annotations

import logging
import struct
from typing import Iterable, Iterator, Mapping, Optional

from msgcodec.binary.decoder import MessageDecoder
from msgcodec.binary.encoder import MessageEncoder
from msgcodec.core.entry import CommandEntry
from msgcodec.core.errors import EncodingError
from msgcodec.tables.database import TableSet, default_tables


MAGIC = 1
HEADER = struct.Struct('<II')
ENTRY = struct.Struct('<II')

logger = logging.getLogger(__name__)


class MessageCatalog:
    """
    Ordered mapping of message ID to encoded message bytes.

    Usage:
        catalog = MessageCatalog.from_bytes(Path("sys.msg").read_bytes())
        entries = catalog.decode(12345)
        catalog[12345] = encode_message(entries)
        Path("sys.msg").write_bytes(catalog.to_bytes())
    """

    def __init__(self, messages: Optional[Mapping[int, bytes]] = None, tables: Optional[TableSet] = None):
        self.tables = tables or default_tables()
        self._messages: dict[int, bytes] = {}
        for message_id, data in (messages or {}).items():
            self[message_id] = data

    # Mapping protocol

    def __getitem__(self, message_id: int) -> bytes:
        return self._messages[message_id]

    def __setitem__(self, message_id: int, data: bytes) -> None:
        if not 0 <= message_id <= 0xFFFFFFFF:
            raise EncodingError(f"Message ID {message_id} does not fit in 32 bits", value=message_id)
        if not data or data[-1] != self.tables.commands.terminator:
            raise EncodingError(f"Message {message_id} is not terminated", value=data)
        self._messages[message_id] = bytes(data)

    def __delitem__(self, message_id: int) -> None:
        del self._messages[message_id]

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._messages

    def __iter__(self) -> Iterator[int]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def ids(self) -> list[int]:
        return list(self._messages)

    def items(self) -> Iterable[tuple[int, bytes]]:
        return self._messages.items()

    # Binary form

    @classmethod
    def from_bytes(cls, data: bytes, tables: Optional[TableSet] = None) -> MessageCatalog:
        """
        Read a catalog file.

        Message extents are found by walking each message up to its
        terminator, since argument bytes may themselves be 0x00. Glyph
        codes are not checked here; decode() reports them per message.
        """
        if len(data) < HEADER.size:
            raise EncodingError("Catalog is too small to hold a header", 0)
        magic, count = HEADER.unpack_from(data, 0)
        if magic != MAGIC:
            raise EncodingError(f"Bad catalog magic {magic}", 0, magic)

        table_end = HEADER.size + count * ENTRY.size
        if table_end > len(data):
            raise EncodingError(f"Catalog table of {count} entries runs past the end", HEADER.size, count)

        catalog = cls(tables=tables)
        decoder = MessageDecoder(catalog.tables)
        for i in range(count):
            entry_pos = HEADER.size + i * ENTRY.size
            message_id, offset = ENTRY.unpack_from(data, entry_pos)
            if offset < table_end or offset >= len(data):
                raise EncodingError(
                    f"Message {message_id} offset {offset} is outside the data area", entry_pos, offset
                )
            end = decoder.scan(data, offset)
            catalog._messages[message_id] = bytes(data[offset:end])

        logger.debug(f"Read catalog with {len(catalog)} messages")
        return catalog

    def to_bytes(self) -> bytes:
        """Write the catalog, sharing storage between identical messages."""
        table_end = HEADER.size + len(self._messages) * ENTRY.size
        blobs = bytearray()
        offsets: dict[bytes, int] = {}

        out = bytearray(HEADER.pack(MAGIC, len(self._messages)))
        for message_id, data in self._messages.items():
            offset = offsets.get(data)
            if offset is None:
                offset = table_end + len(blobs)
                offsets[data] = offset
                blobs += data
            out += ENTRY.pack(message_id, offset)

        out += blobs
        return bytes(out)

    # Entry form

    def decode(self, message_id: int) -> list[CommandEntry]:
        return MessageDecoder(self.tables).decode(self._messages[message_id])

    def decode_all(self) -> dict[int, list[CommandEntry]]:
        decoder = MessageDecoder(self.tables)
        return {message_id: decoder.decode(data) for message_id, data in self._messages.items()}

    @classmethod
    def encode_all(
        cls,
        messages: Mapping[int, Iterable[CommandEntry]],
        tables: Optional[TableSet] = None,
    ) -> MessageCatalog:
        catalog = cls(tables=tables)
        encoder = MessageEncoder(catalog.tables)
        for message_id, entries in messages.items():
            catalog[message_id] = encoder.encode(entries)
        return catalog
