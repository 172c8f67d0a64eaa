"""Bluetooth Low Energy building blocks: UUIDs, GATT profile model, advertising parsing, HCI parameters and SMP pairing primitives."""

__version__ = "0.1.0"