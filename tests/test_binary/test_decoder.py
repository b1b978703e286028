import pytest

from msgcodec.binary import decode_message, decode_text
from msgcodec.core.entry import CommandEntry, MessageCommand
from msgcodec.core.errors import EncodingError


def test_decode_text(decoder):
    assert decoder.decode(bytes([0xA1, 0x9E, 0xA5, 0xA5, 0xA8, 0x00])) == [
        CommandEntry.print_text("hello")
    ]


def test_decode_commands(decoder):
    data = bytes([0x0A, 0x16, 0xA1, 0x9E, 0xB2, 0x03, 0x00])
    assert decoder.decode(data) == [
        CommandEntry(command=MessageCommand.TEXT_SCALE, data=b"\x16"),
        CommandEntry.print_text("hey"),
        CommandEntry(command=MessageCommand.RESET),
    ]


def test_decode_complex_and_icon(decoder):
    data = bytes([0x97, 0x52, 0x01, 0x7A, 0x09, 0x02, 0x00])
    assert decoder.decode(data) == [
        CommandEntry.print_text("7: "),
        CommandEntry(command=MessageCommand.PRINT_COMPLEX, text="VII"),
        CommandEntry.print_icon(2),
    ]


def test_decode_newline(decoder):
    assert decoder.decode(b"\x9a\x02\x9b\x00") == [
        CommandEntry.print_text("a"),
        CommandEntry.new_line(),
        CommandEntry.print_text("b"),
    ]


def test_decode_escaped_glyph(decoder):
    assert decoder.decode(b"\x95\x19\x40\x00") == [CommandEntry.print_text("5€")]


def test_zero_argument_is_not_terminator(decoder):
    assert decoder.decode(b"\x0a\x00\x9a\x00") == [
        CommandEntry(command=MessageCommand.TEXT_SCALE, data=b"\x00"),
        CommandEntry.print_text("a"),
    ]


def test_empty_message(decoder):
    assert decoder.decode(b"\x00") == []


def test_read_returns_end_offset(decoder):
    data = b"\x9a\x00\x9b\x9c\x00"
    entries, end = decoder.read(data, 2)
    assert entries == [CommandEntry.print_text("bc")]
    assert end == 5


def test_missing_terminator(decoder):
    with pytest.raises(EncodingError):
        decoder.decode(b"\xa1\x9e")


def test_truncated_argument(decoder):
    with pytest.raises(EncodingError):
        decoder.decode(b"\x14\x01")


def test_truncated_escape(decoder):
    with pytest.raises(EncodingError):
        decoder.decode(b"\x19")


def test_unassigned_byte(decoder):
    with pytest.raises(EncodingError) as info:
        decoder.decode(b"\x9a\xff\x00")
    assert info.value.position == 1


@pytest.mark.parametrize("script", [
    "hello",
    "7: {VII}",
    "{:scale 22}hey{:reset}",
    "Hey {VII} complex!\nSecond line {item-key}",
    "{:delay 300}{:color 4278190335}{circle}Élan",
])
def test_encode_decode_round_trip(parser, encoder, script_serializer, script):
    data = encoder.encode(parser.parse(script))
    assert decode_text(data) == script_serializer.serialize(parser.parse(script))


def test_module_helper():
    assert decode_message(b"\x03\x00") == [CommandEntry(command=MessageCommand.RESET)]


def test_scan_skips_arguments_and_escaped_codes(decoder):
    data = b"\x0a\x00\x19\x40\xff\x00\x9a"
    assert decoder.scan(data) == 6


def test_scan_missing_terminator(decoder):
    with pytest.raises(EncodingError):
        decoder.scan(b"\x9a\x0a")
