import struct

import pytest

from rcposc.osc import OscBundle, OscError, OscMessage, decode_packet, encode_message


def test_wire_bytes_of_simple_message():
    encoded = encode_message(OscMessage("/scene/current", [1]))
    assert encoded == b"/scene/current\x00\x00,i\x00\x00\x00\x00\x00\x01"


@pytest.mark.parametrize(
    "args",
    [
        [],
        [42],
        [-7, 0.5],
        ["Test Scene"],
        ['"quoted"', 3, 1.25],
        [b"\x01\x02\x03"],
        [True, False, None],
    ],
)
def test_round_trip(args):
    message = OscMessage("/scene/name", args)
    encoded = encode_message(message)
    assert len(encoded) % 4 == 0
    assert decode_packet(encoded) == message


def test_float_is_carried_as_single_precision():
    decoded = decode_packet(encode_message(OscMessage("/x", [3.14])))
    assert abs(decoded.args[0] - 3.14) < 1e-6
    assert decoded.args[0] == struct.unpack(">f", struct.pack(">f", 3.14))[0]


def test_message_without_type_tags():
    assert decode_packet(b"/ping\x00\x00\x00") == OscMessage("/ping", [])


def test_decode_bundle():
    inner = encode_message(OscMessage("/a/b", [5]))
    data = b"#bundle\x00" + struct.pack(">II", 0, 1) + struct.pack(">i", len(inner)) + inner
    packet = decode_packet(data)
    assert isinstance(packet, OscBundle)
    assert packet.timetag == (0, 1)
    assert packet.content == [OscMessage("/a/b", [5])]


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"xyz\x00",
        b"/abc",
        b"/a\x00\x00,i\x00\x00\x00\x01",
        b"/a\x00\x00,z\x00\x00",
        b"/a\x00\x00i\x00\x00\x00\x00\x00\x00\x01",
        b"#bundlX\x00\x00\x00\x00\x00\x00\x00\x00\x00",
    ],
)
def test_decode_errors(data):
    with pytest.raises(OscError):
        decode_packet(data)


def test_encode_rejects_out_of_range_int():
    with pytest.raises(OscError):
        encode_message(OscMessage("/a", [2**31]))


def test_encode_rejects_unknown_type():
    with pytest.raises(OscError):
        encode_message(OscMessage("/a", [object()]))


def test_str_contains_address_and_args():
    text = str(OscMessage("/scene/current", [1, "x"]))
    assert text.startswith("/scene/current")
    assert "'x'" in text