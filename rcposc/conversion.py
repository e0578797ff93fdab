"""Conversion between Yamaha RCP text lines and OSC messages."""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal

from .osc import OscMessage

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)


class ConversionError(ValueError):
    """Raised when a message cannot be converted between RCP and OSC."""


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_f32(value: float) -> str:
    value = _to_f32(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if _to_f32(float(text)) == value:
            break
    return format(Decimal(text), "f")


def rcp_to_osc_type(arg: str) -> int | float | str:
    """Turn one RCP argument into an int, a single-precision float or a string."""
    if _INT_PATTERN.fullmatch(arg):
        number = int(arg)
        if _I32_MIN <= number <= _I32_MAX:
            return number
    if _FLOAT_PATTERN.fullmatch(arg):
        return _to_f32(float(arg))
    return arg


def split_respecting_quotes(s: str) -> list[str]:
    """Split on spaces, keeping quoted sections (quotes included) together."""
    parts: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in s:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == " " and not in_quotes:
            if current:
                parts.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        parts.append("".join(current))
    return parts


def osc_to_rcp_arg(arg) -> str:
    """Render one OSC argument as RCP text; strings are quoted unless already so."""
    if isinstance(arg, bool) or arg is None:
        raise ConversionError("Unsupported OSC type")
    if isinstance(arg, int):
        return str(arg)
    if isinstance(arg, float):
        return _format_f32(arg)
    if isinstance(arg, str):
        if arg.startswith('"') and arg.endswith('"'):
            return arg
        return f'"{arg}"'
    raise ConversionError("Unsupported OSC type")


def osc_to_rcp(message: OscMessage) -> str:
    """Build an RCP command from an OSC message's address and arguments."""
    parts = [part for part in message.addr.split("/") if part]
    if not parts:
        raise ConversionError("Invalid OSC address")
    command = f"{parts[0]} {'/'.join(parts[1:])}"
    try:
        args = [osc_to_rcp_arg(arg) for arg in message.args]
    except ConversionError as exc:
        raise ConversionError(f"Failed to convert OSC arg: {exc}") from exc
    return f"{command} {' '.join(args)}"


def rcp_to_osc(line: str) -> OscMessage:
    """Turn an RCP NOTIFY, OK or ERROR line into an OSC message."""
    parts = split_respecting_quotes(line.strip())
    if not parts:
        raise ConversionError("Invalid OSC address")
    kind = parts[0]
    if kind in ("NOTIFY", "OK"):
        if len(parts) < 3:
            raise ConversionError(f"Incomplete {kind} message")
        return OscMessage(
            f"/{parts[1]}/{parts[2]}",
            [rcp_to_osc_type(arg) for arg in parts[3:]],
        )
    if kind == "ERROR":
        return OscMessage("/error", [rcp_to_osc_type(arg) for arg in parts[1:]])
    raise ConversionError("Unsupported message type")