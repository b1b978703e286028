import pytest

from msgcodec.core.entry import CommandEntry, MessageCommand
from msgcodec.core.errors import ParseError
from msgcodec.script import parse_script


def test_plain_text(parser):
    assert parser.parse("hello") == [CommandEntry.print_text("hello")]


def test_empty_script(parser):
    assert parser.parse("") == []


@pytest.mark.parametrize("value, expected_entries, expected_text", [
    ("hello", 1, "hello"),
    ("hello{VII}", 2, "hello"),
    ("{VII}world", 2, "world"),
    ("hello{VII}world", 3, "hello;world"),
    ("hello{:reset}world", 3, "hello;world"),
])
def test_correct_number_of_entries(parser, value, expected_entries, expected_text):
    entries = parser.parse(value)
    assert len(entries) == expected_entries

    texts = [entry.text for entry in entries if entry.command is MessageCommand.PRINT_TEXT]
    assert texts == expected_text.split(";")


def test_complex_symbol(parser):
    entries = parser.parse("hello{VII}world")
    assert entries[1] == CommandEntry(command=MessageCommand.PRINT_COMPLEX, text="VII")


def test_icon_symbol(parser):
    assert parser.parse("{item-consumable}") == [CommandEntry.print_icon(0)]
    assert parser.parse("{ability-unequip}") == [CommandEntry.print_icon(3)]


def test_reset_has_no_payload(parser):
    reset = parser.parse("hello{:reset}world")[1]
    assert reset.command is MessageCommand.RESET
    assert reset.text is None
    assert reset.data is None


def test_command_with_argument(parser):
    assert parser.parse("{:scale 34}") == [
        CommandEntry(command=MessageCommand.TEXT_SCALE, data=b"\x22")
    ]


def test_wide_argument_is_little_endian(parser):
    assert parser.parse("{:delay 300}") == [
        CommandEntry(command=MessageCommand.DELAY, data=b"\x2c\x01")
    ]


def test_icon_by_number(parser):
    assert parser.parse("{:icon 2}") == [CommandEntry.print_icon(2)]


def test_consecutive_tokens_have_no_empty_text(parser):
    entries = parser.parse("{:scale 22}{VII}{:reset}")
    assert [entry.command for entry in entries] == [
        MessageCommand.TEXT_SCALE,
        MessageCommand.PRINT_COMPLEX,
        MessageCommand.RESET,
    ]


def test_newline_stays_in_literal_run(parser):
    assert parser.parse("Hey\nthere") == [CommandEntry.print_text("Hey\nthere")]


def test_colon_outside_token_is_literal(parser):
    assert parser.parse("7: {VII}")[0] == CommandEntry.print_text("7: ")


@pytest.mark.parametrize("value", [
    "hello{:reset",
    "hello{:reset hello",
    "hello{",
    "{hello",
    "{",
])
def test_parse_error(parser, value):
    with pytest.raises(ParseError):
        parser.parse(value)


@pytest.mark.parametrize("value", [
    "hello}",
    "{VII}}",
    "{:reset{VII}}",
    "{}",
    "{unknown-symbol}",
    "{:shake}",
    "{:reset 1}",
    "{:scale}",
    "{:scale big}",
    "{:scale -1}",
    "{:scale 256}",
    "{:scale 1 2}",
    "{: reset}",
    "{:}",
])
def test_malformed_tokens(parser, value):
    with pytest.raises(ParseError):
        parser.parse(value)


def test_error_reports_position(parser):
    with pytest.raises(ParseError) as info:
        parser.parse("hello{:shake}")
    assert info.value.position == 5
    assert info.value.token == "{:shake}"


def test_stray_close_brace_position(parser):
    with pytest.raises(ParseError) as info:
        parser.parse("ab}cd")
    assert info.value.position == 2


def test_module_helper_uses_default_tables():
    assert parse_script("{VII}") == [CommandEntry(command=MessageCommand.PRINT_COMPLEX, text="VII")]
