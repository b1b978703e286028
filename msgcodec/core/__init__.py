"""
Core codec types: the canonical command-entry model, errors and config.
"""

from msgcodec.core.config import CodecConfig
from msgcodec.core.entry import CommandEntry, Message, MessageCommand, Payload
from msgcodec.core.errors import CodecError, EncodingError, ParseError, TableError

__all__ = [
    "CodecConfig",
    "CodecError",
    "CommandEntry",
    "EncodingError",
    "Message",
    "MessageCommand",
    "ParseError",
    "Payload",
    "TableError",
]
