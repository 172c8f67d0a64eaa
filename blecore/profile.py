"""GATT profile model: services, characteristics and descriptors."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from blecore.bleuuid import UUID

Handler = Callable[..., Any]


class Property(enum.IntFlag):
    """Characteristic property flags (spec 3.3.3.1)."""

    BROADCAST = 0x01
    READ = 0x02
    WRITE_NR = 0x04
    WRITE = 0x08
    NOTIFY = 0x10
    INDICATE = 0x20
    SIGNED_WRITE = 0x40
    EXTENDED = 0x80


class DuplicateUUIDError(ValueError):
    """An attribute with the same UUID is already present."""


class HandlerConflictError(RuntimeError):
    """A static value and a read handler were both configured."""


@dataclass(eq=False)
class Descriptor:
    """A BLE descriptor."""

    uuid: UUID
    property: Property = Property(0)
    handle: int = 0
    value: Optional[bytes] = None
    read_handler: Optional[Handler] = None
    write_handler: Optional[Handler] = None

    def set_value(self, value: bytes) -> None:
        """Serve ``value`` statically for read requests."""
        if self.read_handler is not None:
            raise HandlerConflictError("descriptor has been configured with a read handler")
        self.property |= Property.READ
        self.value = bytes(value)

    def handle_read(self, handler: Handler) -> None:
        """Route read requests to ``handler``."""
        if self.value is not None:
            raise HandlerConflictError("descriptor has been configured with a static value")
        self.property |= Property.READ
        self.read_handler = handler

    def handle_write(self, handler: Handler) -> None:
        """Route write and write-without-response requests to ``handler``."""
        self.property |= Property.WRITE | Property.WRITE_NR
        self.write_handler = handler


@dataclass(eq=False)
class Characteristic:
    """A BLE characteristic."""

    uuid: UUID
    property: Property = Property(0)
    secure: Property = Property(0)
    descriptors: list[Descriptor] = field(default_factory=list)
    cccd: Optional[Descriptor] = None
    value: Optional[bytes] = None
    read_handler: Optional[Handler] = None
    write_handler: Optional[Handler] = None
    notify_handler: Optional[Handler] = None
    indicate_handler: Optional[Handler] = None
    handle: int = 0
    value_handle: int = 0
    end_handle: int = 0

    def add_descriptor(self, desc: Descriptor) -> Descriptor:
        """Add ``desc``; raise DuplicateUUIDError if its UUID is already present."""
        if any(bytes(d.uuid) == bytes(desc.uuid) for d in self.descriptors):
            raise DuplicateUUIDError(
                f"characteristic already contains a descriptor with UUID {UUID(desc.uuid)}"
            )
        self.descriptors.append(desc)
        return desc

    def new_descriptor(self, u: UUID) -> Descriptor:
        """Create a descriptor with UUID ``u`` and add it."""
        return self.add_descriptor(Descriptor(uuid=u))

    def set_value(self, value: bytes) -> None:
        """Serve ``value`` statically for read requests."""
        if self.read_handler is not None:
            raise HandlerConflictError("characteristic has been configured with a read handler")
        self.property |= Property.READ
        self.value = bytes(value)

    def handle_read(self, handler: Handler) -> None:
        """Route read requests to ``handler``."""
        if self.value is not None:
            raise HandlerConflictError("characteristic has been configured with a static value")
        self.property |= Property.READ
        self.read_handler = handler

    def handle_write(self, handler: Handler) -> None:
        """Route write and write-without-response requests to ``handler``."""
        self.property |= Property.WRITE | Property.WRITE_NR
        self.write_handler = handler

    def handle_notify(self, handler: Handler) -> None:
        """Route notification subscriptions to ``handler``."""
        self.property |= Property.NOTIFY
        self.notify_handler = handler

    def handle_indicate(self, handler: Handler) -> None:
        """Route indication subscriptions to ``handler``."""
        self.property |= Property.INDICATE
        self.indicate_handler = handler


@dataclass(eq=False)
class Service:
    """A BLE service."""

    uuid: UUID
    characteristics: list[Characteristic] = field(default_factory=list)
    handle: int = 0
    end_handle: int = 0

    def add_characteristic(self, char: Characteristic) -> Characteristic:
        """Add ``char``; raise DuplicateUUIDError if its UUID is already present."""
        if any(bytes(c.uuid) == bytes(char.uuid) for c in self.characteristics):
            raise DuplicateUUIDError(
                f"service already contains a characteristic with UUID {UUID(char.uuid)}"
            )
        self.characteristics.append(char)
        return char

    def new_characteristic(self, u: UUID) -> Characteristic:
        """Create a characteristic with UUID ``u`` and add it."""
        return self.add_characteristic(Characteristic(uuid=u))


@dataclass(eq=False)
class Profile:
    """A set of services fulfilling a use case."""

    services: list[Service] = field(default_factory=list)

    def find(
        self, target: Any
    ) -> Union[Service, Characteristic, Descriptor, None]:
        """Find the attribute of the same kind and UUID as ``target``."""
        if isinstance(target, Service):
            return self.find_service(target)
        if isinstance(target, Characteristic):
            return self.find_characteristic(target)
        if isinstance(target, Descriptor):
            return self.find_descriptor(target)
        return None

    def find_service(self, service: Service) -> Optional[Service]:
        """Return the first service with the UUID of ``service``."""
        return next(
            (s for s in self.services if bytes(s.uuid) == bytes(service.uuid)), None
        )

    def find_characteristic(self, char: Characteristic) -> Optional[Characteristic]:
        """Return the first characteristic with the UUID of ``char``."""
        return next(
            (
                c
                for s in self.services
                for c in s.characteristics
                if bytes(c.uuid) == bytes(char.uuid)
            ),
            None,
        )

    def find_descriptor(self, desc: Descriptor) -> Optional[Descriptor]:
        """Return the first descriptor with the UUID of ``desc``."""
        return next(
            (
                d
                for s in self.services
                for c in s.characteristics
                for d in c.descriptors
                if bytes(d.uuid) == bytes(desc.uuid)
            ),
            None,
        )