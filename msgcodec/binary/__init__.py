"""
Binary opcode streams and the message catalog container.
"""

from msgcodec.binary.catalog import MessageCatalog
from msgcodec.binary.decoder import MessageDecoder, decode_message, decode_text
from msgcodec.binary.encoder import MessageEncoder, encode_message

__all__ = [
    "MessageCatalog",
    "MessageDecoder",
    "MessageEncoder",
    "decode_message",
    "decode_text",
    "encode_message",
]
