"""Detail views of a captured frame: protocol tree, hex dump and cell ranges."""

from __future__ import annotations

from typing import Optional

from .display import FieldNode, hex_string
from .packet import GVCP_PORT, GVSP_PORT, HEADER_LENGTH, PacketHeaders

BYTES_PER_ROW = 16


def _hex(data: bytes, start: int, end: Optional[int] = None) -> str:
    return "0x" + hex_string(data[start:end])


def _u16(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 2], "big")


def _u32(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 4], "big")


def _u64(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 8], "big")


def _gvcp_tree(data: bytes, src_port: int) -> FieldNode:
    root = FieldNode("GigE Vision Control Protocol", HEADER_LENGTH, 0)
    if src_port == GVCP_PORT and len(data) >= 50:
        root.add("Status: " + _hex(data, 42, 44), 42, 2)
        root.add("Acknowledge: " + _hex(data, 44, 46), 44, 2)
        root.add("Payload Length: " + _hex(data, 46, 48), 46, 2)
        root.add("Request Id: " + _hex(data, 48, 50), 48, 2)
        root.add("Register: " + _hex(data, 50), 50, 0)
        return root
    count = _hex(data, 54, 56) if len(data) > 54 else "NONE"
    root.add("Message Key Code: " + _hex(data, 42, 54), 42, 1)
    root.add("Flags: " + _hex(data, 43, 44), 43, 1)
    root.add("Command: " + _hex(data, 44, 46), 44, 2)
    root.add("Payload Length: " + _hex(data, 46, 48), 46, 2)
    root.add("Request Id: " + _hex(data, 48, 50), 48, 2)
    root.add("Memory Bootstrap Register: " + _hex(data, 50, 54), 50, 4)
    root.add("Register: " + count, 54, 2)
    return root


def _gvsp_tree(data: bytes) -> FieldNode:
    root = FieldNode("GigE Vision Streaming Protocol", HEADER_LENGTH, 0)
    packet_format = data[46]
    root.add("Status: " + _hex(data, 42, 44), 42, 2)
    root.add("Flags: " + _hex(data, 44, 46), 44, 2)
    root.add("Format: " + _hex(data, 46, 47), 46, 1)
    root.add(f"Block Id: {_u64(data, 50)}", 50, 8)
    root.add(f"Pack Id: {_u32(data, 58)}", 58, 4)
    if packet_format == 0x81:
        root.add("Filed Info: " + _hex(data, 62, 63), 62, 1)
        root.add("Generic Flags: " + _hex(data, 63, 64), 63, 1)
        root.add("Payload Type: " + _hex(data, 64, 66), 64, 2)
        root.add("Timestamp: " + _hex(data, 66, 74), 66, 8)
        if data[65] == 7:
            root.add(f"Payload Data Size: {_u64(data, 74)}", 74, 8)
            root.add("Timestamp Tick: " + _hex(data, 82, 90), 82, 8)
            root.add("Data Format: " + _hex(data, 90, 94), 90, 4)
        elif len(data) >= 98:
            root.add("Pixel Format: " + _hex(data, 74, 78), 74, 2)
            root.add(f"X: {_u32(data, 78)}", 78, 4)
            root.add(f"Y: {_u32(data, 82)}", 82, 4)
            root.add(f"Offset X: {_u32(data, 86)}", 86, 4)
            root.add(f"Offset Y: {_u32(data, 90)}", 90, 4)
            root.add(f"Padding X: {_u16(data, 94)}", 94, 2)
            root.add(f"Padding Y: {_u16(data, 96)}", 96, 2)
    elif packet_format == 0x82:
        root.add("Filed Info: " + _hex(data, 62, 64), 62, 2)
        root.add("Payload Type: " + _hex(data, 64, 66), 64, 2)
        root.add(f"Size Y: {_u32(data, 66)}", 66, 4)
    else:
        root.add(f"Payload Data: ({len(data) - 62} bytes)", 62, 0)
    return root


def gige_tree(data: bytes) -> Optional[FieldNode]:
    """Build the GigE Vision (GVCP or GVSP) tree of a frame, or None if it is neither."""
    data = bytes(data)
    if len(data) < HEADER_LENGTH:
        raise ValueError(f"frame too short for headers: {len(data)} bytes")
    src_port = _u16(data, 34)
    dst_port = _u16(data, 36)
    if GVCP_PORT in (src_port, dst_port):
        return _gvcp_tree(data, src_port)
    if GVSP_PORT in (src_port, dst_port) and len(data) >= 93:
        return _gvsp_tree(data)
    return None


def packet_tree(data: bytes, headers: PacketHeaders, protocol: str) -> list[FieldNode]:
    """Build the top-level protocol nodes of a frame.

    ``protocol`` is the protocol name shown in the packet list; for ``"GVCP"``
    or ``"GVSP"`` the payload is decoded as GigE Vision.
    """
    data = bytes(data)
    eth = headers.ethernet
    ip = headers.ipv4
    udp = headers.udp

    ethernet = FieldNode(f"Ethernet Ⅱ, Mac: {eth.src_mac} → {eth.dst_mac}", 0, 14)
    ethernet.add(f"Destination: {eth.dst_mac}", 0, 6)
    ethernet.add(f"Source: {eth.src_mac}", 6, 6)
    ethernet.add(f"{eth.protocol} (0x{eth.protocol_hex})", 12, 2)

    internet = FieldNode(
        f"Internet Protocol Version  {ip.version}, Ip: {ip.src_ip} → {ip.dst_ip}", 14, 20
    )
    internet.add(f"Version: {ip.version}", 14, 1)
    internet.add(f"Header Length: {ip.header_length}", 14, 1)
    internet.add(f"Services: {ip.services}", 15, 1)
    internet.add(f"Total Length: {ip.total_length}", 16, 2)
    internet.add(f"Identification: {ip.identification}", 18, 2)
    internet.add(f"Flags: {ip.flags}", 20, 2)
    internet.add(f"Time To Live: {ip.ttl}", 22, 1)
    internet.add(f"Protocol: {ip.protocol}", 23, 1)
    internet.add(f"Header Checksum: {ip.checksum}", 24, 2)
    internet.add(f"Source Address: {ip.src_ip}", 26, 4)
    internet.add(f"Destination Address: {ip.dst_ip}", 30, 4)

    user = FieldNode(f"User Datagram, Port: {udp.src_port} → {udp.dst_port}", 34, 8)
    user.add(f"Source Port: {udp.src_port}", 34, 2)
    user.add(f"Destination Port: {udp.dst_port}", 36, 2)
    user.add(f"Length: {udp.length}", 38, 2)
    user.add(f"Checksum: {udp.checksum}", 40, 2)

    payload: Optional[FieldNode] = None
    if protocol in ("GVSP", "GVCP"):
        payload = gige_tree(data)
    if payload is None:
        payload = FieldNode(f"Data({len(data) - HEADER_LENGTH} byte)", HEADER_LENGTH, 0)
    return [ethernet, internet, user, payload]


def _ascii_cell(value: int) -> str:
    return chr(value) if 33 < value < 127 else "."


def hex_dump_rows(data: bytes) -> list[tuple[list[str], str]]:
    """Split a frame into rows of 16 hex cells plus their text column.

    The text column holds each byte as a character (``.`` when not a visible
    character), each followed by a space.
    """
    data = bytes(data)
    rows = []
    for start in range(0, len(data), BYTES_PER_ROW):
        chunk = data[start:start + BYTES_PER_ROW]
        cells = [hex_string(bytes([b])) for b in chunk]
        text = "".join(_ascii_cell(b) + " " for b in chunk)
        rows.append((cells, text))
    return rows


def cells_for_range(offset: int, length: int) -> list[tuple[int, int]]:
    """Return the (row, column) hex cells covering ``length`` bytes from ``offset``."""
    if offset < 0 or length < 0:
        raise ValueError("offset and length must not be negative")
    return [divmod(position, BYTES_PER_ROW) for position in range(offset, offset + length)]