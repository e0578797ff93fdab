# rcposc

A small bridge between a Yamaha mixing console's RCP remote-control protocol and OSC.

- RCP lines that come from the console (`NOTIFY`, `OK` and `ERROR`) go out as OSC messages over UDP.
- OSC messages that arrive on a local UDP port go to the console as RCP commands.

## Installation

```
pip install .
```

The package has no runtime dependencies beyond the standard library.

## Running the bridge

```
rcposc --console-ip 192.168.0.128
```

Options:

- `--console-ip` (required): address of the console.
- `--rcp-port` (default `49280`): TCP port the console accepts RCP on.
- `--udp-osc-out-port` (default `3999`): port that OSC messages are sent to.
- `--udp-osc-out-addr` (default `127.0.0.1`): address that OSC messages are sent to.
- `--udp-osc-in-port` (default `4000`): local port to listen on for OSC.
- `--udp-osc-in-addr` (default `0.0.0.0`): local address to listen on for OSC.

The bridge runs until the console closes the connection or reading from it fails. Each
line received, each message sent and each conversion failure is printed.

## Mapping

RCP lines from the console become OSC messages:

- `NOTIFY <type> <name> <args...>` becomes `/<type>/<name> <args...>`
- `OK <type> <name> <args...>` becomes `/<type>/<name> <args...>`
- `ERROR <args...>` becomes `/error <args...>`

Arguments are split on spaces, with double-quoted sections kept whole (quotes included).
Each argument becomes a 32-bit integer if it reads as one, else a single-precision float
if it reads as one, else a string.

An OSC message addressed `/<command>/<rest...>` becomes the RCP command
`<command> <rest...> <args...>`. Integers and floats are written as numbers; strings are
put in double quotes unless they are quoted already. Other argument types are refused.

When the console reports `NOTIFY sscurrent_ex ...`, the bridge also sends
`ssinfo_ex ...` so that the full scene information follows.

## Library use

```python
from rcposc.conversion import rcp_to_osc, osc_to_rcp

message = rcp_to_osc('NOTIFY scene name 1 "Test Scene"')
print(message.addr, message.args)   # /scene/name [1, '"Test Scene"']
print(osc_to_rcp(message))          # scene name 1 "Test Scene"
```

- `rcposc.conversion`: `rcp_to_osc`, `osc_to_rcp`, `rcp_to_osc_type`, `osc_to_rcp_arg`,
  `split_respecting_quotes`; failures raise `ConversionError`.
- `rcposc.osc`: `OscMessage`, `OscBundle`, `encode_message` and `decode_packet` for the
  OSC wire format; malformed data raises `OscError`.
- `rcposc.bridge`: `BridgeConfig`, `parse_args`, `run_bridge` (a coroutine), `LineBuffer`
  and `scene_info_request`.

## Limitations

- OSC bundles that arrive on the listening port are decoded but not forwarded; only
  single OSC messages are turned into RCP commands.
- Incoming OSC datagrams are cut to 1024 bytes.
- The bridge does not reconnect after the console connection ends.

## Tests

```
pip install ".[test]"
pytest
```