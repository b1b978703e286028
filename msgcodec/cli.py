"""
msgtool - command line front end for the message codec.

Usage:
  msgtool encode "{:scale 22}hey{:reset}"
  msgtool decode "0A 16 A1 9E B2 03 00"
  msgtool list   sys.msg
  msgtool export sys.msg -o sys.xml
  msgtool import sys.xml -o sys.msg

Options shared by every command:
  --tables DIR     use table assets from DIR instead of the packaged ones
  --skip-errors    log and skip bad messages instead of aborting
  -v, --verbose    debug logging
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from msgcodec.batch import BatchConverter
from msgcodec.binary.catalog import MessageCatalog
from msgcodec.binary.decoder import decode_text
from msgcodec.binary.encoder import MessageEncoder
from msgcodec.core.config import CodecConfig
from msgcodec.core.errors import CodecError
from msgcodec.document.serializer import load_document, save_document
from msgcodec.script.parser import ScriptParser
from msgcodec.tables.database import load_tables


logger = logging.getLogger("msgtool")


def _config(args: argparse.Namespace) -> CodecConfig:
    return CodecConfig(
        data_path=args.tables,
        on_error="skip" if args.skip_errors else "abort",
    )


def cmd_encode(args: argparse.Namespace) -> int:
    tables = load_tables(args.tables)
    entries = ScriptParser(tables).parse(args.text)
    data = MessageEncoder(tables).encode(entries)
    print(data.hex(' ').upper())
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    tables = load_tables(args.tables)
    try:
        data = bytes.fromhex(args.hex)
    except ValueError as e:
        print(f"[HEX ERROR] {e}", file=sys.stderr)
        return 2
    print(decode_text(data, tables))
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    converter = BatchConverter(_config(args))
    catalog = MessageCatalog.from_bytes(Path(args.msg_file).read_bytes(), converter.tables)
    scripts = converter.catalog_to_scripts(catalog)

    print(f"File: {args.msg_file}")
    print(f"Messages: {len(catalog)}")
    print()
    print("      id |  size | preview")
    print("---------+-------+---------------------------")
    for message_id, data in catalog.items():
        preview = scripts.get(message_id, "<error>")[: args.width].replace("\n", "\\n")
        print(f"{message_id:8d} | {len(data):5d} | {preview}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    config = _config(args)
    converter = BatchConverter(config)
    catalog = MessageCatalog.from_bytes(Path(args.msg_file).read_bytes(), converter.tables)
    root = converter.catalog_to_document(catalog)
    save_document(root, args.output, encoding=config.xml_encoding, pretty=config.pretty_xml)

    print(f"OK: export -> {args.output} ({len(root)} messages, {len(converter.failures)} skipped)")
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    converter = BatchConverter(_config(args))
    catalog = converter.document_to_catalog(load_document(args.xml_file))
    Path(args.output).write_bytes(catalog.to_bytes())

    print(f"OK: import -> {args.output} ({len(catalog)} messages, {len(converter.failures)} skipped)")
    return 0


def build_argparser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--tables", help="Directory holding schemas/ and data/ table assets")
    common.add_argument("--skip-errors", action="store_true", help="Skip bad messages instead of aborting")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    p = argparse.ArgumentParser(
        prog="msgtool",
        description="Convert game messages between script, binary and XML forms.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_enc = sub.add_parser("encode", parents=[common], help="Encode a script string to hex.")
    p_enc.add_argument("text", help="Escape-syntax script")
    p_enc.set_defaults(func=cmd_encode)

    p_dec = sub.add_parser("decode", parents=[common], help="Decode hex bytes to a script string.")
    p_dec.add_argument("hex", help="Hex bytes, spaces allowed")
    p_dec.set_defaults(func=cmd_decode)

    p_list = sub.add_parser("list", parents=[common], help="List the messages of a catalog.")
    p_list.add_argument("msg_file", help="Binary message catalog")
    p_list.add_argument("--width", type=int, default=40, help="Preview length")
    p_list.set_defaults(func=cmd_list)

    p_exp = sub.add_parser("export", parents=[common], help="Export a catalog to XML.")
    p_exp.add_argument("msg_file", help="Binary message catalog")
    p_exp.add_argument("-o", "--output", required=True, help="Output XML file")
    p_exp.set_defaults(func=cmd_export)

    p_imp = sub.add_parser("import", parents=[common], help="Build a catalog from XML.")
    p_imp.add_argument("xml_file", help="XML document with a <messages> root")
    p_imp.add_argument("-o", "--output", required=True, help="Output binary catalog")
    p_imp.set_defaults(func=cmd_import)

    return p


def main(argv: List[str] | None = None) -> int:
    p = build_argparser()
    args = p.parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return int(args.func(args))
    except CodecError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"[{type(e).__name__.upper()}] {e}", file=sys.stderr)
        return 2
    except FileNotFoundError as e:
        print(f"[FILE ERROR] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
