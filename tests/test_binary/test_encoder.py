import pytest

from msgcodec.binary import encode_message
from msgcodec.core.entry import CommandEntry, MessageCommand
from msgcodec.core.errors import EncodingError, ParseError


@pytest.mark.parametrize("value, expected", [
    ("hello", bytes([0xA1, 0x9E, 0xA5, 0xA5, 0xA8, 0x00])),
    ("7: {VII}", bytes([0x97, 0x52, 0x01, 0x7A, 0x00])),
    ("{:reset}", bytes([0x03, 0x00])),
    ("{:scale 22}hey{:reset}", bytes([0x0A, 0x16, 0xA1, 0x9E, 0xB2, 0x03, 0x00])),
])
def test_encode_script(parser, encoder, value, expected):
    assert encoder.encode(parser.parse(value)) == expected


def test_empty_message_is_terminator_only(encoder):
    assert encoder.encode([]) == b"\x00"


def test_encoding_is_deterministic(parser, encoder):
    entries = parser.parse("hello")
    assert encoder.encode(entries) == encoder.encode(entries)


def test_icon(encoder):
    assert encoder.encode([CommandEntry.print_icon(3)]) == b"\x09\x03\x00"


def test_wide_argument(parser, encoder):
    assert encoder.encode(parser.parse("{:delay 300}")) == b"\x14\x2c\x01\x00"


def test_newline_entry_and_character(encoder):
    entries = [CommandEntry.print_text("a\nb"), CommandEntry.new_line()]
    assert encoder.encode(entries) == b"\x9a\x02\x9b\x02\x00"


def test_escaped_glyph(encoder):
    assert encoder.encode([CommandEntry.print_text("5€")]) == b"\x95\x19\x40\x00"


def test_two_byte_complex_glyph(encoder):
    entry = CommandEntry(command=MessageCommand.PRINT_COMPLEX, text="circle")
    assert encoder.encode([entry]) == b"\x1b\x42\x00"


def test_unknown_character(encoder):
    with pytest.raises(EncodingError) as info:
        encoder.encode([CommandEntry.print_text("ok"), CommandEntry.print_text("a\tb")])
    assert info.value.position == 1
    assert info.value.value == "\t"


def test_unknown_complex_glyph(encoder):
    entry = CommandEntry(command=MessageCommand.PRINT_COMPLEX, text="XLII")
    with pytest.raises(EncodingError):
        encoder.encode([entry])


def test_wrong_argument_width(encoder):
    entry = CommandEntry(command=MessageCommand.TEXT_SCALE, data=b"\x01\x02")
    with pytest.raises(EncodingError):
        encoder.encode([entry])


def test_encoding_error_is_not_parse_error(encoder):
    with pytest.raises(EncodingError) as info:
        encoder.encode([CommandEntry.print_text("{")])
    assert not isinstance(info.value, ParseError)


def test_module_helper():
    assert encode_message([CommandEntry(command=MessageCommand.RESET)]) == b"\x03\x00"
