import pytest

from rcposc.conversion import (
    ConversionError,
    osc_to_rcp,
    osc_to_rcp_arg,
    rcp_to_osc,
    rcp_to_osc_type,
    split_respecting_quotes,
)
from rcposc.osc import OscMessage

F32_EPSILON = 1.1920929e-07


def test_rcp_to_osc_type_int():
    value = rcp_to_osc_type("42")
    assert value == 42
    assert isinstance(value, int)


def test_rcp_to_osc_type_float():
    value = rcp_to_osc_type("3.14")
    assert isinstance(value, float)
    assert abs(value - 3.14) < F32_EPSILON


def test_rcp_to_osc_type_string():
    assert rcp_to_osc_type("test") == "test"


def test_rcp_to_osc_type_beyond_i32_is_float():
    value = rcp_to_osc_type("2147483648")
    assert isinstance(value, float)
    assert value == 2147483648.0


@pytest.mark.parametrize("text", ["1_000", " 5", "0x10", "."])
def test_rcp_to_osc_type_keeps_odd_text_as_string(text):
    assert rcp_to_osc_type(text) == text


def test_split_basic():
    assert split_respecting_quotes("command arg1 arg2") == ["command", "arg1", "arg2"]


def test_split_quoted():
    assert split_respecting_quotes('command "arg with spaces" arg2') == [
        "command",
        '"arg with spaces"',
        "arg2",
    ]


def test_split_empty():
    assert split_respecting_quotes("") == []


def test_split_multiple_spaces():
    assert split_respecting_quotes("command   arg1    arg2") == ["command", "arg1", "arg2"]


def test_osc_to_rcp_arg_values():
    assert osc_to_rcp_arg(42) == "42"
    assert osc_to_rcp_arg(3.14) == "3.14"
    assert osc_to_rcp_arg("test") == '"test"'


def test_osc_to_rcp_arg_already_quoted():
    assert osc_to_rcp_arg('"x y"') == '"x y"'


def test_osc_to_rcp_arg_float_without_exponent():
    assert osc_to_rcp_arg(1.0) == "1"
    assert osc_to_rcp_arg(1e20) == "100000000000000000000"


@pytest.mark.parametrize("arg", [None, True, b"blob"])
def test_osc_to_rcp_arg_unsupported(arg):
    with pytest.raises(ConversionError):
        osc_to_rcp_arg(arg)


def test_rcp_to_osc_notify():
    message = rcp_to_osc("NOTIFY scene current 1")
    assert message.addr == "/scene/current"
    assert message.args == [1]


def test_rcp_to_osc_ok():
    message = rcp_to_osc("OK scene current 2")
    assert message.addr == "/scene/current"
    assert message.args == [2]


def test_rcp_to_osc_error():
    message = rcp_to_osc("ERROR some error message")
    assert message.addr == "/error"
    assert len(message.args) == 3


def test_rcp_to_osc_invalid():
    with pytest.raises(ConversionError):
        rcp_to_osc("INVALID message")


def test_rcp_to_osc_empty():
    with pytest.raises(ConversionError):
        rcp_to_osc("   ")


def test_rcp_to_osc_incomplete_notify():
    with pytest.raises(ConversionError):
        rcp_to_osc("NOTIFY scene")


def test_osc_to_rcp_basic():
    assert osc_to_rcp(OscMessage("/scene/current", [1])) == "scene current 1"


def test_osc_to_rcp_multiple_args():
    message = OscMessage("/scene/name", [1, "Test Scene"])
    assert osc_to_rcp(message) == 'scene name 1 "Test Scene"'


def test_osc_to_rcp_invalid_address():
    with pytest.raises(ConversionError):
        osc_to_rcp(OscMessage("", []))


def test_osc_to_rcp_unsupported_arg():
    with pytest.raises(ConversionError, match="Failed to convert OSC arg"):
        osc_to_rcp(OscMessage("/scene/current", [None]))


def test_bidirectional():
    osc = rcp_to_osc("NOTIFY scene current 1")
    assert osc_to_rcp(osc) == "scene current 1"


def test_bidirectional_quoted():
    osc = rcp_to_osc('NOTIFY scene name 1 "Test Scene"')
    assert osc_to_rcp(osc) == 'scene name 1 "Test Scene"'