"""Formatting helpers for hex views and labelled byte-range trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence, Union

_HEX_DIGITS = "0123456789ABCDEF"


@dataclass
class FieldNode:
    """A labelled node covering ``length`` bytes starting at ``offset``."""

    label: str
    offset: int = 0
    length: int = 0
    children: list["FieldNode"] = field(default_factory=list)

    def add(self, label: str, offset: int, length: int) -> "FieldNode":
        """Append a child node and return it."""
        child = FieldNode(label, offset, length)
        self.children.append(child)
        return child

    def walk(self) -> Iterator["FieldNode"]:
        """Yield this node and all descendants in depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, label: str) -> Optional["FieldNode"]:
        """Return the first node in walk order with the given label, or None."""
        return next((node for node in self.walk() if node.label == label), None)


def byte_to_hex(value: int) -> str:
    """Format one byte as two upper-case hex digits."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte value out of range: {value}")
    return _HEX_DIGITS[value // 16] + _HEX_DIGITS[value % 16]


def hex_string(data: Union[bytes, bytearray, Iterable[int]]) -> str:
    """Concatenate the upper-case hex form of every byte in ``data``."""
    return "".join(byte_to_hex(b) for b in bytes(data))


def printable(data: Union[bytes, bytearray, str]) -> str:
    """Replace every character outside printable ASCII (32..126) with '.'."""
    if isinstance(data, str):
        codes: Iterable[int] = (ord(c) for c in data)
    else:
        codes = bytes(data)
    return "".join(chr(c) if 32 <= c <= 126 else "." for c in codes)


def int_to_hex(value: int, width: int) -> str:
    """Format an unsigned integer of ``width`` bytes as big-endian hex."""
    if width <= 0:
        raise ValueError(f"width must be positive: {width}")
    if not 0 <= value < 1 << (8 * width):
        raise ValueError(f"value {value} does not fit in {width} bytes")
    return hex_string(value.to_bytes(width, "big"))


def int_array_hex(values: Sequence[int], width: int) -> str:
    """Format a little-endian array of ``width``-byte integers as one hex number.

    The last element comes first, each element big-endian.
    """
    return "".join(int_to_hex(v, width) for v in reversed(values))