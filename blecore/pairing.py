"""Security Manager Protocol pairing definitions: codes, configuration and helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

CID_SMP = 0x0006  # L2CAP channel of the LE Security Manager

PASSKEY_ITERATION_COUNT = 20
AUTH_REQ_BOND_MASK = 0x03
AUTH_REQ_BOND = 0x01
AUTH_REQ_NO_BOND = 0x00
AUTH_REQ_MITM = 0x04


class IoCap(enum.IntEnum):
    """Input/output capabilities (Vol 3, Part H, 3.5.1)."""

    DISPLAY_ONLY = 0x00
    DISPLAY_YES_NO = 0x01
    KEYBOARD_ONLY = 0x02
    NO_INPUT_NO_OUTPUT = 0x03
    KEYBOARD_DISPLAY = 0x04


IO_CAP_RESERVED_START = 0x05


class OobDataFlag(enum.IntEnum):
    """Whether out-of-band authentication data is present."""

    NOT_PRESENT = 0x00
    PRESENT = 0x01


class PairingType(enum.IntEnum):
    """Association model chosen for a pairing."""

    JUST_WORKS = 0
    NUMERIC_COMP = 1
    PASSKEY = 2
    OOB = 3

    def __str__(self) -> str:
        return _PAIRING_TYPE_NAMES[self]


_PAIRING_TYPE_NAMES = {
    PairingType.JUST_WORKS: "Just Works",
    PairingType.NUMERIC_COMP: "Numeric Comparison",
    PairingType.PASSKEY: "Passkey Entry",
    PairingType.OOB: "OOB Data",
}


class SmpCode(enum.IntEnum):
    """SMP command codes."""

    PAIRING_REQUEST = 0x01
    PAIRING_RESPONSE = 0x02
    PAIRING_CONFIRM = 0x03
    PAIRING_RANDOM = 0x04
    PAIRING_FAILED = 0x05
    ENCRYPTION_INFORMATION = 0x06
    MASTER_IDENTIFICATION = 0x07
    IDENTITY_INFORMATION = 0x08
    IDENTITY_ADDR_INFORMATION = 0x09
    SIGNING_INFORMATION = 0x0A
    SECURITY_REQUEST = 0x0B
    PAIRING_PUBLIC_KEY = 0x0C
    PAIRING_DHKEY_CHECK = 0x0D
    PAIRING_KEYPRESS = 0x0E


@dataclass(frozen=True)
class AuthData:
    """Authentication input for a pairing: a passkey or OOB data."""

    passkey: int = 0
    oob_data: bytes = b""


@dataclass(frozen=True)
class SmpConfig:
    """Fields of a Pairing Request or Pairing Response."""

    io_cap: int = IoCap.KEYBOARD_DISPLAY
    oob_flag: int = OobDataFlag.NOT_PRESENT
    auth_req: int = 0x09
    max_key_size: int = 16
    init_key_dist: int = 0x00
    resp_key_dist: int = 0x01

    @classmethod
    def from_bytes(cls, data: bytes) -> "SmpConfig":
        """Decode the six parameter bytes that follow the command code."""
        data = bytes(data)
        if len(data) < 6:
            raise ValueError(f"{data.hex()}, invalid length {len(data)}")
        return cls(*data[:6])

    def _fields(self) -> bytes:
        return bytes(
            [
                self.io_cap,
                self.oob_flag,
                self.auth_req,
                self.max_key_size,
                self.init_key_dist,
                self.resp_key_dist,
            ]
        )


DEFAULT_SMP_CONFIG = SmpConfig()


# Core spec v5.0, Vol 3, Part H, 3.5.5, Table 3.7
_PAIRING_FAILED_REASONS = {
    0x0: "reserved",
    0x1: "passkey entry failed",
    0x2: "oob not available",
    0x3: "authentication requirements",
    0x4: "confirm value failed",
    0x5: "pairing not support",
    0x6: "encryption key size",
    0x7: "command not supported",
    0x8: "unspecified reason",
    0x9: "repeated attempts",
    0xA: "invalid parameters",
    0xB: "DHKey check failed",
    0xC: "numeric comparison failed",
    0xD: "BR/EDR pairing in progress",
    0xE: "cross-transport key derivation/generation not allowed",
}


def pairing_failed_reason(code: int) -> str:
    """Describe a Pairing Failed reason code, or return "unknown"."""
    return _PAIRING_FAILED_REASONS.get(code, "unknown")


class PairingFailedError(Exception):
    """The peer reported that pairing failed."""

    def __init__(self, code: Optional[int] = None) -> None:
        self.code = code
        self.reason = "unknown" if code is None else pairing_failed_reason(code)
        super().__init__(f"pairing failed: {self.reason}")


_J, _N, _P = PairingType.JUST_WORKS, PairingType.NUMERIC_COMP, PairingType.PASSKEY

# Core spec v5.0 Vol 3, Part H, 2.3.5.1, indexed [responder][initiator]
_IO_CAPS_TABLE_SC = (
    (_J, _J, _P, _J, _P),
    (_J, _N, _P, _J, _N),
    (_P, _P, _P, _J, _P),
    (_J, _J, _J, _J, _J),
    (_P, _N, _P, _J, _N),
)

_IO_CAPS_TABLE_LEGACY = (
    (_J, _J, _P, _J, _P),
    (_J, _J, _P, _J, _P),
    (_P, _P, _P, _J, _P),
    (_J, _J, _J, _J, _J),
    (_P, _P, _P, _J, _P),
)


def determine_pairing_type(
    request: SmpConfig, response: SmpConfig, legacy: bool
) -> PairingType:
    """Choose the association model from the exchanged pairing features."""
    if request.oob_flag == OobDataFlag.PRESENT or response.oob_flag == OobDataFlag.PRESENT:
        return PairingType.OOB
    if not request.auth_req & AUTH_REQ_MITM and not response.auth_req & AUTH_REQ_MITM:
        return PairingType.JUST_WORKS
    if (
        response.io_cap >= IO_CAP_RESERVED_START
        or request.io_cap >= IO_CAP_RESERVED_START
    ):
        return PairingType.JUST_WORKS
    table = _IO_CAPS_TABLE_LEGACY if legacy else _IO_CAPS_TABLE_SC
    return table[response.io_cap][request.io_cap]


def build_pairing_request(config: SmpConfig) -> bytes:
    """Encode a Pairing Request command."""
    return bytes([SmpCode.PAIRING_REQUEST]) + config._fields()


def build_pairing_response(config: SmpConfig) -> bytes:
    """Encode a Pairing Response command."""
    return bytes([SmpCode.PAIRING_RESPONSE]) + config._fields()


def frame_smp_pdu(payload: bytes) -> bytes:
    """Wrap an SMP command in an L2CAP basic header for the SMP channel."""
    payload = bytes(payload)
    if len(payload) > 0xFFFF:
        raise ValueError(f"SMP payload too long: {len(payload)}")
    return len(payload).to_bytes(2, "little") + CID_SMP.to_bytes(2, "little") + payload