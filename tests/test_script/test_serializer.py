import pytest

from msgcodec.core.entry import CommandEntry, MessageCommand
from msgcodec.script import serialize_script


def test_plain_simple_text(script_serializer):
    entry = CommandEntry(command=MessageCommand.PRINT_TEXT, text="Hello world!")
    assert script_serializer.serialize([entry]) == "Hello world!"


def test_plain_complex_text(script_serializer):
    entries = [
        CommandEntry(command=MessageCommand.PRINT_TEXT, text="Hey "),
        CommandEntry(command=MessageCommand.PRINT_COMPLEX, text="VII"),
        CommandEntry(command=MessageCommand.PRINT_TEXT, text=" complex!"),
        CommandEntry(command=MessageCommand.NEW_LINE, text=" complex!"),
    ]
    assert script_serializer.serialize(entries) == "Hey {VII} complex!\n"


def test_plain_command(script_serializer):
    entries = [CommandEntry(command=MessageCommand.TEXT_SCALE, data=b"\x22")]
    assert script_serializer.serialize(entries) == "{:scale 34}"


def test_command_without_argument(script_serializer):
    assert script_serializer.serialize([CommandEntry(command=MessageCommand.RESET)]) == "{:reset}"


def test_wide_argument(script_serializer):
    entries = [CommandEntry(command=MessageCommand.COLOR, data=b"\xff\x00\x00\x80")]
    assert script_serializer.serialize(entries) == "{:color 2147483903}"


def test_named_icon(script_serializer):
    assert script_serializer.serialize([CommandEntry.print_icon(1)]) == "{item-tent}"


def test_unnamed_icon_falls_back_to_number(script_serializer):
    assert script_serializer.serialize([CommandEntry.print_icon(200)]) == "{:icon 200}"


def test_empty_message(script_serializer):
    assert script_serializer.serialize([]) == ""


@pytest.mark.parametrize("script", [
    "hello",
    "hello{VII}world",
    "Hey {VII} complex!\nNext line",
    "{:scale 22}hey{:reset}",
    "{:delay 300}{item-key}{:color 4278190335}",
    "{:icon 1}",
    "{:icon 222}",
    "",
])
def test_round_trip_is_stable(parser, script_serializer, script):
    once = script_serializer.serialize(parser.parse(script))
    twice = script_serializer.serialize(parser.parse(once))
    assert twice == once


def test_parser_output_serializes_to_input(parser, script_serializer):
    script = "Hey {VII}{:scale 34}big{:reset}{item-key}"
    assert script_serializer.serialize(parser.parse(script)) == script


def test_module_helper():
    assert serialize_script([CommandEntry.print_text("a"), CommandEntry.new_line()]) == "a\n"
