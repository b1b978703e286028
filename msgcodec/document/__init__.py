"""
XML documents for localization tooling.
"""

from msgcodec.document.serializer import (
    DocumentSerializer,
    load_document,
    save_document,
    to_string,
)

__all__ = [
    "DocumentSerializer",
    "load_document",
    "save_document",
    "to_string",
]
