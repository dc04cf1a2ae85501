"""Decoding of Ethernet/IPv4/UDP headers and one-line packet summaries."""

from __future__ import annotations

from dataclasses import dataclass

from .display import byte_to_hex, hex_string
from .protocols import ether_type_name, ip_protocol_name

HEADER_LENGTH = 42
GVCP_PORT = 3956
GVSP_PORT = 3959

_ICMP_MESSAGES: dict[tuple[int, int], str] = {
    (0, 0): "Echo reply",
    (8, 0): "Echo request",
    (3, 0): "Destination network unreachable",
    (3, 1): "Destination host unreachable",
    (3, 2): "Destination protocol unreachable",
    (3, 3): "Destination port unreachable",
    (3, 4): "Fragmentation needed and DF set",
    (3, 13): "Communication administratively prohibited",
    (5, 1): "Redirect for host",
    (11, 0): "TTL exceeded in transit",
    (12, 0): "Parameter problem",
}

_GVCP_ACKS = {0x81: " < READREG_ACK", 0x83: " < WRITEREG_ACK", 0x85: " < READMEME_ACK"}
_GVCP_CMDS = {0x80: " > READREG_CMD", 0x82: " > WRITEREG_CMD", 0x84: " > READMEME_CMD"}
_GVSP_FORMATS = {0x81: " LEADER", 0x82: " TRAILER", 0x83: " PAYLOAD"}


@dataclass(frozen=True)
class EthernetHeader:
    """Ethernet II header fields."""

    dst_mac: str
    src_mac: str
    ether_type: int
    protocol: str
    protocol_hex: str


@dataclass(frozen=True)
class Ipv4Header:
    """IPv4 header fields, formatted for display where the viewer shows text."""

    version: int
    header_length: str
    services: str
    total_length: int
    identification: str
    flags: str
    ttl: int
    protocol: str
    protocol_number: int
    checksum: str
    src_ip: str
    dst_ip: str


@dataclass(frozen=True)
class UdpHeader:
    """UDP header fields."""

    src_port: int
    dst_port: int
    length: int
    checksum: str


@dataclass(frozen=True)
class PacketHeaders:
    """The three decoded header layers of a captured frame."""

    ethernet: EthernetHeader
    ipv4: Ipv4Header
    udp: UdpHeader


def _u16(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 2], "big")


def _u32(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 4], "big")


def _u64(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 8], "big")


def _mac(data: bytes) -> str:
    return ":".join(byte_to_hex(b) for b in data)


def _bits(value: int) -> str:
    return format(value, "08b")


def analyze_headers(data: bytes) -> PacketHeaders:
    """Decode the Ethernet, IPv4 and UDP headers of a frame."""
    data = bytes(data)
    if len(data) < HEADER_LENGTH:
        raise ValueError(f"frame too short for headers: {len(data)} bytes")

    ether_type = _u16(data, 12)
    ethernet = EthernetHeader(
        dst_mac=_mac(data[0:6]),
        src_mac=_mac(data[6:12]),
        ether_type=ether_type,
        protocol=ether_type_name(ether_type),
        protocol_hex=hex_string(data[12:14]),
    )

    first = data[14]
    proto = data[23]
    ipv4 = Ipv4Header(
        version=first >> 4,
        header_length=f"{first & 0x0F} * 4 (bytes)",
        services="0x" + hex_string(data[15:16]),
        total_length=_u16(data, 16),
        identification=f"0x{hex_string(data[18:20])}({_u16(data, 18)})",
        flags=_bits(data[20]) + _bits(data[21]),
        ttl=data[22],
        protocol=f"{ip_protocol_name(proto)}({proto})",
        protocol_number=proto,
        checksum="0x" + hex_string(data[24:26]),
        src_ip=".".join(str(b) for b in data[26:30]),
        dst_ip=".".join(str(b) for b in data[30:34]),
    )

    udp = UdpHeader(
        src_port=_u16(data, 34),
        dst_port=_u16(data, 36),
        length=_u16(data, 38),
        checksum="0x" + hex_string(data[40:42]),
    )
    return PacketHeaders(ethernet, ipv4, udp)


def _icmp_info(data: bytes) -> str:
    kind = data[34]
    code = data[35] if len(data) > 35 else 0
    return _ICMP_MESSAGES.get((kind, code), f"{kind} : {code}")


def _gvcp_info(view: bytes, src_port: int) -> str:
    command = view[45]
    request_id = _u16(view, 48)
    if src_port == GVCP_PORT:
        info = _GVCP_ACKS.get(command) or hex_string(view[44:46])
        return f"{info}   ID = {request_id}   Val ={_u32(view, 50)}"
    info = _GVCP_CMDS.get(command) or hex_string(view[44:46])
    return f"{info}   ID = {request_id}   [Addr: 0x{hex_string(view[50:54])}]"


def _gvsp_info(view: bytes) -> str:
    info = _GVSP_FORMATS.get(view[46]) or hex_string(view[44:46])
    block_id = _u64(view, 50)
    packet_id = _u32(view, 58)
    return f"{info} [Block ID: {block_id}   Package ID: {packet_id}]"


def protocol_info(protocol: str, data: bytes) -> tuple[str, str]:
    """Summarise a frame for the packet list.

    ``protocol`` is the bare IP protocol name (such as ``"UDP"``). Returns the
    protocol name to show, which becomes ``"GVCP"`` or ``"GVSP"`` for GigE
    Vision traffic, and the info text.
    """
    data = bytes(data)
    info = ""
    if protocol == "ICMP" and len(data) >= 35:
        info = _icmp_info(data)
    elif protocol == "UDP":
        if len(data) < 39:
            return protocol, ""
        view = data + bytes(max(0, 62 - len(data)))
        src_port = _u16(view, 34)
        dst_port = _u16(view, 36)
        if GVCP_PORT in (src_port, dst_port):
            info = _gvcp_info(view, src_port)
            protocol = "GVCP"
        elif GVSP_PORT in (src_port, dst_port):
            info = _gvsp_info(view)
            protocol = "GVSP"

    if not info:
        if len(data) < 39:
            return protocol, ""
        info = f"{_u16(data, 34)} → {_u16(data, 36)}  Length: {len(data) - HEADER_LENGTH}"
    return protocol, info