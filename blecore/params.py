"""HCI scan, advertising and connection parameters with validation."""

from __future__ import annotations

from dataclasses import dataclass, field

ADDRESS_TYPE_PUBLIC = 0
ADDRESS_TYPE_RANDOM = 1
FILTER_POLICY_ACCEPT_ALL = 0
FILTER_POLICY_ACCEPT_WHITELIST = 1
LE_SCAN_TYPE_PASSIVE = 0
LE_SCAN_TYPE_ACTIVE = 1

LE_SCAN_INTERVAL_MIN = 0x0004
LE_SCAN_INTERVAL_MAX = 0x4000
LE_SCAN_WINDOW_MIN = 0x0004
LE_SCAN_WINDOW_MAX = 0x4000

CONN_INTERVAL_MIN = 0x0006
CONN_INTERVAL_MAX = 0x0C80
CONN_LATENCY_MIN = 0x0000
CONN_LATENCY_MAX = 0x01F3

SUPERVISION_TIMEOUT_MIN = 0x000A
SUPERVISION_TIMEOUT_MAX = 0x0C80

CE_LENGTH_MIN = 0x0000
CE_LENGTH_MAX = 0xFFFF

_ADDRESS_TYPES = (ADDRESS_TYPE_PUBLIC, ADDRESS_TYPE_RANDOM)
_FILTER_POLICIES = (FILTER_POLICY_ACCEPT_ALL, FILTER_POLICY_ACCEPT_WHITELIST)


class InvalidParameterError(ValueError):
    """A parameter is out of its allowed range."""


@dataclass
class ScanParameters:
    """LE Set Scan Parameters command fields."""

    le_scan_type: int = 0x01  # 0x00 passive, 0x01 active
    le_scan_interval: int = 0x0004  # N * 0.625 ms
    le_scan_window: int = 0x0004  # N * 0.625 ms
    own_address_type: int = 0x00
    scanning_filter_policy: int = 0x00


@dataclass
class AdvertisingParameters:
    """LE Set Advertising Parameters command fields."""

    advertising_interval_min: int = 0x0020  # N * 0.625 ms
    advertising_interval_max: int = 0x0020
    advertising_type: int = 0x00  # ADV_IND
    own_address_type: int = 0x00
    direct_address_type: int = 0x00
    direct_address: bytes = bytes(6)
    advertising_channel_map: int = 0x07  # channels 37, 38, 39
    advertising_filter_policy: int = 0x00


@dataclass
class ConnectionParameters:
    """LE Create Connection command fields."""

    le_scan_interval: int = 0x0040
    le_scan_window: int = 0x0040
    initiator_filter_policy: int = 0x00
    peer_address_type: int = 0x00
    peer_address: bytes = bytes(6)
    own_address_type: int = 0x00
    conn_interval_min: int = 0x0006  # N * 1.25 ms
    conn_interval_max: int = 0x0006
    conn_latency: int = 0x0000
    supervision_timeout: int = 0x0400  # N * 10 ms
    minimum_ce_length: int = 0x0000
    maximum_ce_length: int = 0x0000


def validate_scan_params(p: ScanParameters) -> None:
    """Raise InvalidParameterError if ``p`` is not acceptable."""
    if p.le_scan_type not in (LE_SCAN_TYPE_ACTIVE, LE_SCAN_TYPE_PASSIVE):
        raise InvalidParameterError(f"invalid LEScanType {p.le_scan_type}")
    if not LE_SCAN_INTERVAL_MIN <= p.le_scan_interval <= LE_SCAN_INTERVAL_MAX:
        raise InvalidParameterError(f"invalid LEScanInterval {p.le_scan_interval}")
    if not LE_SCAN_WINDOW_MIN <= p.le_scan_window <= LE_SCAN_WINDOW_MAX:
        raise InvalidParameterError(f"invalid LEScanWindow {p.le_scan_window}")
    if p.le_scan_window > p.le_scan_interval:
        raise InvalidParameterError(
            f"LEScanWindow {p.le_scan_window} > LEScanInterval {p.le_scan_interval}"
        )
    if p.own_address_type not in _ADDRESS_TYPES:
        raise InvalidParameterError(f"invalid OwnAddressType {p.own_address_type}")
    if p.scanning_filter_policy not in _FILTER_POLICIES:
        raise InvalidParameterError(
            f"invalid ScanningFilterPolicy {p.scanning_filter_policy}"
        )


def validate_conn_params(p: ConnectionParameters) -> None:
    """Raise InvalidParameterError if ``p`` is not acceptable."""
    min_sto_ms = (1 + p.conn_latency * 1.25) * (p.conn_interval_max * 1.25) * 2
    sto_ms = p.supervision_timeout * 10

    if not LE_SCAN_INTERVAL_MIN <= p.le_scan_interval <= LE_SCAN_INTERVAL_MAX:
        raise InvalidParameterError(f"invalid LEScanInterval {p.le_scan_interval}")
    if not LE_SCAN_WINDOW_MIN <= p.le_scan_window <= LE_SCAN_WINDOW_MAX:
        raise InvalidParameterError(f"invalid LEScanWindow {p.le_scan_window}")
    if p.le_scan_window > p.le_scan_interval:
        raise InvalidParameterError(
            f"LEScanWindow {p.le_scan_window} > LEScanInterval {p.le_scan_interval}"
        )
    if p.initiator_filter_policy not in _FILTER_POLICIES:
        raise InvalidParameterError(
            f"invalid InitiatorFilterPolicy {p.initiator_filter_policy}"
        )
    if p.own_address_type not in _ADDRESS_TYPES:
        raise InvalidParameterError(f"invalid OwnAddressType {p.own_address_type}")
    if p.peer_address_type not in _ADDRESS_TYPES:
        raise InvalidParameterError(f"invalid PeerAddressType {p.peer_address_type}")
    if not CONN_INTERVAL_MIN <= p.conn_interval_max <= CONN_INTERVAL_MAX:
        raise InvalidParameterError(f"invalid ConnIntervalMax {p.conn_interval_max}")
    if not CONN_INTERVAL_MIN <= p.conn_interval_min <= CONN_INTERVAL_MAX:
        raise InvalidParameterError(f"invalid ConnIntervalMin {p.conn_interval_min}")
    if p.conn_interval_min > p.conn_interval_max:
        raise InvalidParameterError(
            f"ConnIntervalMin {p.conn_interval_min} > ConnIntervalMax {p.conn_interval_max}"
        )
    if not CONN_LATENCY_MIN <= p.conn_latency <= CONN_LATENCY_MAX:
        raise InvalidParameterError(f"invalid ConnLatency {p.conn_latency}")
    if not SUPERVISION_TIMEOUT_MIN <= p.supervision_timeout <= SUPERVISION_TIMEOUT_MAX:
        raise InvalidParameterError(
            f"invalid SupervisionTimeout {p.supervision_timeout}"
        )
    if sto_ms < min_sto_ms:
        raise InvalidParameterError(
            f"invalid SupervisionTimeout {p.supervision_timeout} (too small)"
        )
    if not CE_LENGTH_MIN <= p.minimum_ce_length <= CE_LENGTH_MAX:
        raise InvalidParameterError(f"invalid MinimumCELength {p.minimum_ce_length}")
    if not CE_LENGTH_MIN <= p.maximum_ce_length <= CE_LENGTH_MAX:
        raise InvalidParameterError(f"invalid MaximumCELength {p.maximum_ce_length}")
    if p.minimum_ce_length > p.maximum_ce_length:
        raise InvalidParameterError(
            f"MinimumCELength {p.minimum_ce_length} > MaximumCELength {p.maximum_ce_length}"
        )


@dataclass
class Params:
    """The scan, advertising and connection parameters of a device."""

    scan_params: ScanParameters = field(default_factory=ScanParameters)
    adv_params: AdvertisingParameters = field(default_factory=AdvertisingParameters)
    conn_params: ConnectionParameters = field(default_factory=ConnectionParameters)

    def validate(self) -> None:
        """Validate connection then scan parameters."""
        validate_conn_params(self.conn_params)
        validate_scan_params(self.scan_params)