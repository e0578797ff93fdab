"""Encoding and decoding of OSC packets as carried in UDP datagrams."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Union

_BUNDLE_TAG = b"#bundle\x00"
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

OscArg = Union[int, float, str, bytes, bool, None]


class OscError(ValueError):
    """Raised when an OSC packet cannot be encoded or decoded."""


@dataclass
class OscMessage:
    """An OSC message: an address pattern and its arguments."""

    addr: str
    args: list = field(default_factory=list)

    def __str__(self) -> str:
        if not self.args:
            return self.addr
        return f"{self.addr}, " + ", ".join(repr(arg) for arg in self.args)


@dataclass
class OscBundle:
    """An OSC bundle: a time tag and the packets it carries."""

    timetag: tuple[int, int]
    content: list = field(default_factory=list)


def _padded_string(text: str) -> bytes:
    raw = text.encode("utf-8") + b"\x00"
    return raw + b"\x00" * (-len(raw) % 4)


def _encode_arg(arg: OscArg) -> tuple[str, bytes]:
    if arg is None:
        return "N", b""
    if isinstance(arg, bool):
        return ("T" if arg else "F"), b""
    if isinstance(arg, int):
        if not _I32_MIN <= arg <= _I32_MAX:
            raise OscError(f"integer out of 32-bit range: {arg}")
        return "i", struct.pack(">i", arg)
    if isinstance(arg, float):
        try:
            return "f", struct.pack(">f", arg)
        except OverflowError:
            return "f", struct.pack(">f", float("inf") if arg > 0 else float("-inf"))
    if isinstance(arg, str):
        return "s", _padded_string(arg)
    if isinstance(arg, (bytes, bytearray)):
        blob = bytes(arg)
        return "b", struct.pack(">i", len(blob)) + blob + b"\x00" * (-len(blob) % 4)
    raise OscError(f"cannot encode OSC argument of type {type(arg).__name__}")


def encode_message(message: OscMessage) -> bytes:
    """Encode a message into its OSC wire form."""
    tags = [","]
    payload = []
    for arg in message.args:
        tag, data = _encode_arg(arg)
        tags.append(tag)
        payload.append(data)
    return _padded_string(message.addr) + _padded_string("".join(tags)) + b"".join(payload)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def take(self, size: int) -> bytes:
        if size < 0 or size > self.remaining:
            raise OscError("truncated OSC packet")
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def string(self) -> str:
        end = self._data.find(b"\x00", self._pos)
        if end < 0:
            raise OscError("unterminated OSC string")
        size = end - self._pos + 1
        raw = self.take(size + (-size % 4))[: size - 1]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise OscError("OSC string is not valid UTF-8") from exc

    def int32(self) -> int:
        return struct.unpack(">i", self.take(4))[0]

    def uint32(self) -> int:
        return struct.unpack(">I", self.take(4))[0]


def _decode_message(data: bytes) -> OscMessage:
    reader = _Reader(data)
    addr = reader.string()
    if reader.remaining == 0:
        return OscMessage(addr, [])
    tags = reader.string()
    if not tags.startswith(","):
        raise OscError("OSC type tag string must start with ','")
    args: list = []
    for tag in tags[1:]:
        if tag == "i":
            args.append(reader.int32())
        elif tag == "f":
            args.append(struct.unpack(">f", reader.take(4))[0])
        elif tag == "s":
            args.append(reader.string())
        elif tag == "b":
            size = reader.int32()
            blob = reader.take(size)
            reader.take(-size % 4)
            args.append(blob)
        elif tag == "T":
            args.append(True)
        elif tag == "F":
            args.append(False)
        elif tag == "N":
            args.append(None)
        else:
            raise OscError(f"unsupported OSC type tag {tag!r}")
    return OscMessage(addr, args)


def _decode_bundle(data: bytes) -> OscBundle:
    reader = _Reader(data)
    if reader.take(8) != _BUNDLE_TAG:
        raise OscError("malformed OSC bundle header")
    timetag = (reader.uint32(), reader.uint32())
    content = []
    while reader.remaining:
        size = reader.int32()
        content.append(decode_packet(reader.take(size)))
    return OscBundle(timetag, content)


def decode_packet(data: bytes) -> OscMessage | OscBundle:
    """Decode a datagram into an OSC message or bundle."""
    data = bytes(data)
    if not data:
        raise OscError("empty OSC packet")
    if data[:1] == b"/":
        return _decode_message(data)
    if data[:1] == b"#":
        return _decode_bundle(data)
    raise OscError("OSC packet must start with '/' or '#'")