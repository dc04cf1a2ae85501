"""Hex table of a PE image and address lookups for the PE viewer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .display import byte_to_hex, int_to_hex, printable
from .pefile import PeFile

BYTES_PER_ROW = 16
_ADDRESS_LIMIT = 0xFFFFFFFF
_HEX_CHARS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class HexRow:
    """One row of the hex table: address, 16 byte cells and the text column."""

    address: str
    cells: list[str]
    text: str


def hex_rows(data: bytes) -> list[HexRow]:
    """Lay out ``data`` as rows of 16 bytes with an 8-digit address column."""
    data = bytes(data)
    rows = []
    for start in range(0, len(data), BYTES_PER_ROW):
        chunk = data[start:start + BYTES_PER_ROW]
        text = printable(chunk)
        rows.append(HexRow(
            address=int_to_hex(start, 4),
            cells=[byte_to_hex(b) for b in chunk],
            text="".join(c + " " for c in text),
        ))
    return rows


def byte_cells(offset: int, length: int) -> list[tuple[int, int]]:
    """Return the (row, column) table cells of a byte range; column 0 is the address."""
    if offset < 0 or length < 0:
        raise ValueError("offset and length must not be negative")
    cells = []
    for position in range(offset, offset + length):
        row, column = divmod(position, BYTES_PER_ROW)
        cells.append((row, column + 1))
    return cells


def parse_hex_address(text: str) -> int:
    """Parse a hexadecimal address without prefix, such as ``401000``."""
    text = text.strip("\r\n")
    if not text:
        raise ValueError("empty address")
    if not set(text) <= _HEX_CHARS:
        raise ValueError(f"not a hexadecimal number: {text!r}")
    value = int(text, 16)
    if value > _ADDRESS_LIMIT:
        raise ValueError(f"address exceeds 32 bits: {text!r}")
    return value


def describe_foa(pe: Optional[PeFile], text: str) -> str:
    """Describe the file offset of a virtual address typed as hex text."""
    if pe is None or not pe.sections:
        return "空的节表!"
    try:
        address = parse_hex_address(text)
    except ValueError:
        return "错误的16进制数值!"
    rva = address - pe.optional_header["image_base"]
    foa = pe.rva_to_foa(rva) if rva >= 0 else None
    if foa:
        return f"FOA:0x{foa:X}"
    return "未找到匹配节!"