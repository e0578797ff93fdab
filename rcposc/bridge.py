"""Bridge between a Yamaha console's RCP TCP stream and OSC over UDP."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import sys
from dataclasses import dataclass

from .conversion import ConversionError, osc_to_rcp, rcp_to_osc, split_respecting_quotes
from .osc import OscBundle, OscError, decode_packet, encode_message

_READ_SIZE = 1024
_DATAGRAM_LIMIT = 1024


@dataclass
class BridgeConfig:
    """Where the console is and where OSC is sent and received."""

    console_ip: str
    rcp_port: int = 49280
    udp_osc_out_port: int = 3999
    udp_osc_out_addr: str = "127.0.0.1"
    udp_osc_in_port: int = 4000
    udp_osc_in_addr: str = "0.0.0.0"


class LineBuffer:
    """Collects RCP stream data and yields complete newline-terminated lines."""

    def __init__(self) -> None:
        self._pending = ""

    def feed(self, data: bytes) -> list[str]:
        """Add received bytes; return the lines completed by them."""
        self._pending += data.decode("utf-8", errors="replace")
        *lines, self._pending = self._pending.split("\n")
        return lines


def scene_info_request(parts: list[str]) -> str | None:
    """Return the ssinfo_ex query a scene-change notification calls for, if any.

    The console's sscurrent_ex notification lacks some scene data, so the
    bridge asks for it with ssinfo_ex.
    """
    if len(parts) >= 2 and parts[0] == "NOTIFY" and parts[1] == "sscurrent_ex":
        return f"ssinfo_ex {' '.join(parts[2:])}\n"
    return None


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= value <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def parse_args(argv=None) -> BridgeConfig:
    """Parse command-line options into a configuration."""
    defaults = BridgeConfig(console_ip="")
    parser = argparse.ArgumentParser(
        prog="rcposc", description="Converts Yamaha RCP commands to OSC messages"
    )
    parser.add_argument("--console-ip", required=True, help="The remote console IP")
    parser.add_argument("--rcp-port", type=_port, default=defaults.rcp_port,
                        help="The remote RCP port")
    parser.add_argument("--udp-osc-out-port", type=_port, default=defaults.udp_osc_out_port,
                        help="The remote OSC port")
    parser.add_argument("--udp-osc-out-addr", default=defaults.udp_osc_out_addr,
                        help="The remote OSC address")
    parser.add_argument("--udp-osc-in-port", type=_port, default=defaults.udp_osc_in_port,
                        help="The local OSC port")
    parser.add_argument("--udp-osc-in-addr", default=defaults.udp_osc_in_addr,
                        help="The local OSC address")
    return BridgeConfig(**vars(parser.parse_args(argv)))


class _DatagramQueue(asyncio.DatagramProtocol):
    def __init__(self, queue: asyncio.Queue) -> None:
        self._queue = queue

    def datagram_received(self, data: bytes, addr) -> None:
        self._queue.put_nowait(data[:_DATAGRAM_LIMIT])


async def _write_rcp(writer: asyncio.StreamWriter, lock: asyncio.Lock, text: str) -> bool:
    async with lock:
        try:
            writer.write(text.encode("utf-8"))
            await writer.drain()
        except (OSError, ConnectionError) as exc:
            print(f"Failed to write to RCP stream: {exc}", file=sys.stderr)
            return False
    return True


async def _forward_osc(queue: asyncio.Queue, writer: asyncio.StreamWriter,
                       lock: asyncio.Lock) -> None:
    while True:
        data = await queue.get()
        try:
            packet = decode_packet(data)
        except OscError:
            continue
        if isinstance(packet, OscBundle):
            print("Received OSC bundle - not implemented")
            continue
        print(f"Received OSC: {packet}")
        try:
            command = osc_to_rcp(packet)
        except ConversionError as exc:
            print(f"Failed to convert OSC to RCP: {exc}")
            continue
        print(f"Sending RCP: {command}")
        await _write_rcp(writer, lock, f"{command}\n")


async def run_bridge(config: BridgeConfig) -> None:
    """Relay RCP lines to OSC and OSC messages to RCP until the console disconnects."""
    loop = asyncio.get_running_loop()
    osc_out = f"{config.udp_osc_out_addr}:{config.udp_osc_out_port}"
    osc_in = f"{config.udp_osc_in_addr}:{config.udp_osc_in_port}"

    out_transport, _ = await loop.create_datagram_endpoint(
        asyncio.DatagramProtocol,
        remote_addr=(config.udp_osc_out_addr, config.udp_osc_out_port),
    )
    incoming: asyncio.Queue = asyncio.Queue()
    in_transport, _ = await loop.create_datagram_endpoint(
        lambda: _DatagramQueue(incoming),
        local_addr=(config.udp_osc_in_addr, config.udp_osc_in_port),
    )
    print(f"Listening for OSC messages on: {osc_in}")
    print(f"Sending OSC messages to: {osc_out}")

    try:
        try:
            reader, writer = await asyncio.open_connection(config.console_ip, config.rcp_port)
        except OSError as exc:
            print(f"Failed to connect: {exc}")
            return
        print(f"Connected to Yamaha RCP: {config.console_ip}")
        lock = asyncio.Lock()
        osc_task = asyncio.create_task(_forward_osc(incoming, writer, lock))
        try:
            await _relay_rcp(reader, writer, lock, out_transport)
        finally:
            osc_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await osc_task
            writer.close()
            with contextlib.suppress(OSError):
                await writer.wait_closed()
    finally:
        in_transport.close()
        out_transport.close()


async def _relay_rcp(reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                     lock: asyncio.Lock, out_transport) -> None:
    lines = LineBuffer()
    while True:
        try:
            data = await reader.read(_READ_SIZE)
        except OSError as exc:
            print(f"Failed to receive data: {exc}")
            return
        if not data:
            print("Connection closed by server")
            return
        for line in lines.feed(data):
            parts = split_respecting_quotes(line.strip())
            if not parts:
                continue
            print(f"Received RCP: {line.strip()}")
            try:
                message = rcp_to_osc(line)
            except ConversionError as exc:
                print(f"Failed to convert RCP to OSC: {exc}")
                continue
            request = scene_info_request(parts)
            if request is not None:
                await _write_rcp(writer, lock, request)
            print(f"Sending OSC: {message}")
            out_transport.sendto(encode_message(message))


def main(argv=None) -> int:
    """Command-line entry point."""
    config = parse_args(argv)
    asyncio.run(run_bridge(config))
    return 0