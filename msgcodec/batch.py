"""
Batch conversion of whole message catalogs.

The codec itself always raises on bad input. This is where the
abort-or-skip decision for a catalog is made:
- "abort": the first error stops the conversion and propagates
- "skip": the bad message is logged, left out of the result and recorded
  in `failures`, which holds the latest conversion only
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Callable, Iterable, Mapping, Optional

from msgcodec.binary.catalog import MessageCatalog
from msgcodec.binary.decoder import MessageDecoder
from msgcodec.binary.encoder import MessageEncoder
from msgcodec.core.config import CodecConfig
from msgcodec.core.errors import CodecError, ParseError
from msgcodec.document.serializer import CATALOG_TAG, ID_ATTR, DocumentSerializer
from msgcodec.script.parser import ScriptParser
from msgcodec.script.serializer import ScriptSerializer
from msgcodec.tables.database import TableSet, load_tables


class BatchConverter:
    """
    Converts catalogs between binary, script and document forms.

    Usage:
        converter = BatchConverter(CodecConfig(on_error="skip"))
        root = converter.catalog_to_document(catalog)
        for message_id, error in converter.failures:
            ...
    """

    def __init__(self, config: Optional[CodecConfig] = None, tables: Optional[TableSet] = None):
        self.config = config or CodecConfig()
        self.tables = tables or load_tables(self.config.data_path)
        self.failures: list[tuple[Any, CodecError]] = []

        self._parser = ScriptParser(self.tables)
        self._script = ScriptSerializer(self.tables)
        self._encoder = MessageEncoder(self.tables)
        self._decoder = MessageDecoder(self.tables)
        self._document = DocumentSerializer(self.tables)

        self.logger = logging.getLogger(__name__)

    def catalog_to_document(self, catalog: MessageCatalog) -> ET.Element:
        """Decode every message and build a <messages> document."""
        root = ET.Element(CATALOG_TAG)
        converted = self._convert(
            catalog.items(),
            lambda message_id, data: self._document.serialize(message_id, self._decoder.decode(data)),
        )
        for _, element in converted:
            root.append(element)
        return root

    def document_to_catalog(self, root: ET.Element) -> MessageCatalog:
        """Encode every <message> of a document into a catalog."""
        if root.tag != CATALOG_TAG:
            raise ParseError(f"Expected <{CATALOG_TAG}>, found <{root.tag}>", token=root.tag)

        def encode(_: Any, element: ET.Element) -> tuple[int, bytes]:
            message_id, entries = self._document.deserialize(element)
            return message_id, self._encoder.encode(entries)

        catalog = MessageCatalog(tables=self.tables)
        items = [(element.get(ID_ATTR), element) for element in root]
        for _, (message_id, data) in self._convert(items, encode):
            if message_id in catalog:
                self._fail(message_id, ParseError(f"Message {message_id} appears twice"))
                continue
            self._store(catalog, message_id, data)
        return catalog

    def scripts_to_catalog(self, scripts: Mapping[int, str]) -> MessageCatalog:
        """Parse and encode escape-syntax scripts keyed by message ID."""
        converted = self._convert(
            scripts.items(),
            lambda _, script: self._encoder.encode(self._parser.parse(script)),
        )
        catalog = MessageCatalog(tables=self.tables)
        for message_id, data in converted:
            self._store(catalog, message_id, data)
        return catalog

    def catalog_to_scripts(self, catalog: MessageCatalog) -> dict[int, str]:
        """Decode every message of a catalog to escape-syntax text."""
        converted = self._convert(
            catalog.items(),
            lambda _, data: self._script.serialize(self._decoder.decode(data)),
        )
        return dict(converted)

    def _convert(self, items: Iterable[tuple[Any, Any]], convert: Callable[[Any, Any], Any]) -> list[tuple[Any, Any]]:
        # Failures describe the current conversion only
        self.failures = []
        results = []
        for key, value in items:
            try:
                results.append((key, convert(key, value)))
            except CodecError as e:
                self._fail(key, e)
        if self.failures:
            self.logger.info(f"Converted {len(results)} messages, skipped {len(self.failures)}")
        else:
            self.logger.info(f"Converted {len(results)} messages")
        return results

    def _fail(self, key: Any, error: CodecError) -> None:
        if not self.config.skip_errors:
            raise error
        self.logger.warning(f"Skipping message {key}: {error}")
        self.failures.append((key, error))

    def _store(self, catalog: MessageCatalog, message_id: int, data: bytes) -> None:
        try:
            catalog[message_id] = data
        except CodecError as e:
            self._fail(message_id, e)
