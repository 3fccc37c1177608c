"""Data types of EBML element payloads."""

from __future__ import annotations

from enum import IntEnum


class DataType(IntEnum):
    """The kind of value an EBML element carries."""

    MASTER = 0
    INT = 1
    UINT = 2
    DATE = 3
    FLOAT = 4
    BINARY = 5
    STRING = 6
    BLOCK = 7

    @classmethod
    def _missing_(cls, value: object) -> DataType | None:
        if not isinstance(value, int):
            return None
        member = int.__new__(cls, value)
        member._name_ = None
        member._value_ = value
        return member

    def __str__(self) -> str:
        return _LABELS.get(self._name_, "unknown")


_LABELS = {
    "MASTER": "Master",
    "INT": "Int",
    "UINT": "UInt",
    "DATE": "Date",
    "FLOAT": "Float",
    "BINARY": "Binary",
    "STRING": "String",
    "BLOCK": "Block",
}