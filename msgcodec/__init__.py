"""
msgcodec

Converts in-game dialogue between three forms:
- escape-syntax scripts written by translators
- the packed, null-terminated opcode stream read by the text renderer
- XML documents used by localization tooling

Quick Start:
    from msgcodec import parse_script, encode_message, decode_text

    entries = parse_script("{:scale 22}hey{:reset}")
    data = encode_message(entries)   # b'\\x0a\\x16\\xa1\\x9e\\xb2\\x03\\x00'
    decode_text(data)                # '{:scale 22}hey{:reset}'
"""

__version__ = "0.1.0"

from msgcodec.core import (
    CodecConfig,
    CodecError,
    CommandEntry,
    EncodingError,
    Message,
    MessageCommand,
    ParseError,
    TableError,
)
from msgcodec.tables import TableDatabase, TableSet, default_tables, load_tables
from msgcodec.script import ScriptParser, ScriptSerializer, parse_script, serialize_script
from msgcodec.binary import (
    MessageCatalog,
    MessageDecoder,
    MessageEncoder,
    decode_message,
    decode_text,
    encode_message,
)
from msgcodec.document import DocumentSerializer, load_document, save_document
from msgcodec.batch import BatchConverter

__all__ = [
    "BatchConverter",
    "CodecConfig",
    "CodecError",
    "CommandEntry",
    "DocumentSerializer",
    "EncodingError",
    "Message",
    "MessageCatalog",
    "MessageCommand",
    "MessageDecoder",
    "MessageEncoder",
    "ParseError",
    "ScriptParser",
    "ScriptSerializer",
    "TableDatabase",
    "TableError",
    "TableSet",
    "decode_message",
    "decode_text",
    "default_tables",
    "encode_message",
    "load_document",
    "load_tables",
    "parse_script",
    "save_document",
    "serialize_script",
]
