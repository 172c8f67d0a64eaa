"""Decoding of BLE advertising data (AD structures) into a dictionary."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from blecore.bleuuid import UUID


class AdvKeys:
    """Keys of the dictionary produced by :func:`parse`."""

    FLAGS = "flags"
    SERVICES = "services"
    SOLICITED = "solicited"
    SERVICE_DATA = "serviceData"
    NAME = "name"
    TX_POWER = "txpwr"
    MFG = "mfg"


class AdvType(enum.IntEnum):
    """AD type codes from the GAP assigned numbers."""

    FLAGS = 0x01
    UUID16_INCOMPLETE = 0x02
    UUID16_COMPLETE = 0x03
    UUID32_INCOMPLETE = 0x04
    UUID32_COMPLETE = 0x05
    UUID128_INCOMPLETE = 0x06
    UUID128_COMPLETE = 0x07
    NAME_SHORT = 0x08
    NAME_COMPLETE = 0x09
    TX_POWER = 0x0A
    SOLICITED16 = 0x14
    SOLICITED128 = 0x15
    SERVICE_DATA16 = 0x16
    SOLICITED32 = 0x1F
    SERVICE_DATA32 = 0x20
    SERVICE_DATA128 = 0x21
    MFG_DATA = 0xFF


class AdvParseError(ValueError):
    """Malformed advertising data.

    ``partial`` holds whatever was decoded before the error.
    """

    def __init__(self, message: str, partial: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.partial: dict[str, Any] = partial if partial is not None else {}


@dataclass(frozen=True)
class _Decoder:
    array_element_size: int
    min_size: int
    service_uuid_size: int
    key: str


_DECODERS: dict[int, _Decoder] = {
    AdvType.UUID16_INCOMPLETE: _Decoder(2, 2, 0, AdvKeys.SERVICES),
    AdvType.UUID16_COMPLETE: _Decoder(2, 2, 0, AdvKeys.SERVICES),
    AdvType.UUID32_INCOMPLETE: _Decoder(4, 4, 0, AdvKeys.SERVICES),
    AdvType.UUID32_COMPLETE: _Decoder(4, 4, 0, AdvKeys.SERVICES),
    AdvType.UUID128_INCOMPLETE: _Decoder(16, 16, 0, AdvKeys.SERVICES),
    AdvType.UUID128_COMPLETE: _Decoder(16, 16, 0, AdvKeys.SERVICES),
    AdvType.SOLICITED16: _Decoder(2, 2, 0, AdvKeys.SOLICITED),
    AdvType.SOLICITED32: _Decoder(4, 4, 0, AdvKeys.SOLICITED),
    AdvType.SOLICITED128: _Decoder(16, 16, 0, AdvKeys.SOLICITED),
    AdvType.SERVICE_DATA16: _Decoder(0, 2, 2, AdvKeys.SERVICE_DATA),
    AdvType.SERVICE_DATA32: _Decoder(0, 4, 4, AdvKeys.SERVICE_DATA),
    AdvType.SERVICE_DATA128: _Decoder(0, 16, 16, AdvKeys.SERVICE_DATA),
    AdvType.NAME_COMPLETE: _Decoder(0, 1, 0, AdvKeys.NAME),
    AdvType.NAME_SHORT: _Decoder(0, 1, 0, AdvKeys.NAME),
    AdvType.TX_POWER: _Decoder(0, 1, 0, AdvKeys.TX_POWER),
    AdvType.MFG_DATA: _Decoder(0, 1, 0, AdvKeys.MFG),
    AdvType.FLAGS: _Decoder(0, 1, 0, AdvKeys.FLAGS),
}


def _split_uuids(size: int, data: bytes) -> list[UUID]:
    if size <= 0:
        raise ValueError("invalid size")
    if not data:
        raise ValueError("nil/empty bytes")
    if len(data) % size != 0:
        raise ValueError("incorrect size")
    return [UUID(data[j : j + size]) for j in range(0, len(data), size)]


def parse(pdu: bytes | bytearray) -> dict[str, Any]:
    """Decode the AD structures in ``pdu``.

    UUID lists are returned as lists of :class:`UUID`, service data as a
    dictionary from UUID string to a list of payloads, everything else as
    raw bytes. Unknown AD types are skipped.
    """
    pdu = bytes(pdu)
    if not pdu:
        raise AdvParseError("nil/empty pdu")

    result: dict[str, Any] = {}
    i = 0
    while i + 1 < len(pdu):
        length = pdu[i]
        typ = pdu[i + 1]

        if length < 1:
            raise AdvParseError(f"invalid record length {length}, idx {i}", result)
        if i + length >= len(pdu):
            raise AdvParseError(
                f"buffer overflow: want {i + length}, have {len(pdu)}, idx {i}", result
            )

        data = pdu[i + 2 : i + 1 + length]
        dec = _DECODERS.get(typ)
        if dec is not None:
            if dec.min_size > len(data):
                raise AdvParseError(
                    f"adv type {typ}: min length {dec.min_size}, have {len(data)}, idx {i}",
                    result,
                )

            if dec.array_element_size > 0:
                try:
                    uuids = _split_uuids(dec.array_element_size, data)
                except ValueError as exc:
                    raise AdvParseError(f"adv type {typ}, idx {i}: {exc}", result) from exc
                result.setdefault(dec.key, []).extend(uuids)
            elif dec.service_uuid_size > 0:
                su = str(UUID(data[: dec.service_uuid_size]))
                sd = data[dec.service_uuid_size :]
                result.setdefault(dec.key, {}).setdefault(su, []).append(sd)
            else:
                result[dec.key] = data

        i += length + 1

    return result