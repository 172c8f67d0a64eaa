# blecore

Building blocks for Bluetooth Low Energy hosts, in pure Python.

| Module | What it provides |
| --- | --- |
| `blecore.bytesops` | `swap_buf`, a byte-reversed copy of a buffer |
| `blecore.bleuuid` | `UUID` (16- or 128-bit, stored little-endian, printed as big-endian hex), `parse`, `uuid16`, `reverse`, `contains`, `name` for well-known UUIDs |
| `blecore.profile` | GATT `Profile`, `Service`, `Characteristic`, `Descriptor`, the `Property` flags, `DuplicateUUIDError`, `HandlerConflictError` |
| `blecore.parser` | `parse` for advertising / scan response payloads, with `AdvKeys`, `AdvType` and `AdvParseError` |
| `blecore.params` | `ScanParameters`, `AdvertisingParameters`, `ConnectionParameters`, `Params`, `validate_scan_params`, `validate_conn_params`, `InvalidParameterError` |
| `blecore.smpcrypto` | Security Manager toolbox: `aes_cmac`, `aes128`, `xor_bytes`, `smp_f4`, `smp_f5`, `smp_f6`, `smp_g2`, `smp_e`, `smp_c1`, `smp_s1`, `is_legacy`, `legacy_pairing_tk` |
| `blecore.ecdh` | P-256 key pairs (`ECDHKeys`, `generate_keys`), public keys in little-endian wire form (`marshal_public_key_xy`, `marshal_public_key_x`, `unmarshal_public_key`), `generate_secret` |
| `blecore.pairing` | SMP codes and enums (`SmpCode`, `IoCap`, `OobDataFlag`, `PairingType`), `AuthData`, `SmpConfig`, `determine_pairing_type`, `build_pairing_request`, `build_pairing_response`, `frame_smp_pdu`, `pairing_failed_reason`, `PairingFailedError` |

All multi-byte values in the crypto and pairing modules are little-endian,
as they appear on the air.

## Installation

```
pip install .
```

The only runtime dependency is `cryptography`.

## Examples

Parse a UUID and look up its name:

```python
from blecore.bleuuid import parse, name

u = parse("180d")
print(str(u), name(u))       # 180d Heart Rate
```

`parse` raises `ValueError` for strings that are not hex or not 2 or 16 bytes long.

Decode an advertising payload:

```python
from blecore.parser import parse as parse_adv, AdvKeys

fields = parse_adv(bytes([0x02, 0x01, 0x06, 0x03, 0x03, 0x0D, 0x18]))
print(fields[AdvKeys.FLAGS], fields[AdvKeys.SERVICES])
```

UUID lists come back as lists of `UUID`, service data as a dictionary from
UUID string to a list of payloads, other fields as raw bytes. Unknown AD types
are skipped; malformed records raise `AdvParseError`, whose `partial`
attribute holds what was decoded before the error.

Build a GATT service:

```python
from blecore.bleuuid import uuid16
from blecore.profile import Profile, Service, Characteristic

svc = Service(uuid16(0x180F))
level = svc.new_characteristic(uuid16(0x2A19))
level.set_value(b"\x64")     # also sets Property.READ

profile = Profile([svc])
assert profile.find(Characteristic(uuid16(0x2A19))) is level
```

Adding a second characteristic or descriptor with the same UUID raises
`DuplicateUUIDError`; giving an attribute both a static value and a read
handler raises `HandlerConflictError`.

Validate connection parameters:

```python
from blecore.params import Params

params = Params()
params.conn_params.supervision_timeout = 0x0005
params.validate()   # raises InvalidParameterError: invalid SupervisionTimeout 5
```

Choose a pairing method:

```python
from blecore.pairing import SmpConfig, determine_pairing_type

request = SmpConfig.from_bytes(bytes([0x04, 0x00, 0x0D, 16, 0x00, 0x01]))
response = SmpConfig.from_bytes(bytes([0x00, 0x00, 0x0D, 16, 0x00, 0x01]))
print(determine_pairing_type(request, response, legacy=False))   # Passkey Entry
```

Frame a Pairing Request for the SMP channel:

```python
from blecore.pairing import SmpConfig, build_pairing_request, frame_smp_pdu

pdu = frame_smp_pdu(build_pairing_request(SmpConfig()))
```

## What this package does not do

It does not talk to a Bluetooth controller: there is no HCI transport, no
scanning, advertising or connection handling, no GATT client or server, and no
running pairing state machine. It provides the data model, parsers,
parameter checks and cryptographic functions such a host is built from.

## Running the tests

```
pip install .[test]
pytest
```