from msgcodec.core.config import CodecConfig
from msgcodec.core.errors import CodecError, EncodingError, ParseError, TableError

import pytest


def test_error_hierarchy():
    assert issubclass(ParseError, CodecError)
    assert issubclass(EncodingError, CodecError)
    assert issubclass(TableError, CodecError)
    assert not issubclass(ParseError, EncodingError)
    assert not issubclass(EncodingError, ParseError)


def test_parse_error_carries_position():
    error = ParseError("Unterminated token", 5, "{:reset")
    assert error.position == 5
    assert error.token == "{:reset"
    assert "position 5" in str(error)


def test_encoding_error_carries_value():
    error = EncodingError("Character has no glyph", 0, "{")
    assert error.value == "{"
    assert str(error) == "Character has no glyph (at 0)"


def test_config_defaults():
    config = CodecConfig()
    assert config.data_path is None
    assert config.on_error == "abort"
    assert not config.skip_errors


def test_config_rejects_unknown_policy():
    with pytest.raises(ValueError):
        CodecConfig(on_error="retry")


def test_config_skip_policy(tmp_path):
    config = CodecConfig(data_path=str(tmp_path), on_error="skip")
    assert config.skip_errors
    assert config.data_path == tmp_path
