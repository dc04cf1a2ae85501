import struct

import pytest

from devtoolkit.packet import (
    EthernetHeader,
    Ipv4Header,
    PacketHeaders,
    UdpHeader,
    analyze_headers,
    protocol_info,
)

DST_MAC = bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x01])
SRC_MAC = bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x02])


def _frame(src_port=1234, dst_port=80, payload=b"hello", proto=17, ttl=64):
    eth = DST_MAC + SRC_MAC + b"\x08\x00"
    ip = bytes([0x45, 0x00]) + struct.pack(">H", 20 + 8 + len(payload))
    ip += struct.pack(">H", 0x1C46) + bytes([0x40, 0x00, ttl, proto])
    ip += b"\xab\xcd" + bytes([10, 0, 0, 1]) + bytes([10, 0, 0, 2])
    udp = struct.pack(">HHH", src_port, dst_port, 8 + len(payload)) + b"\x12\x34"
    return eth + ip + udp + payload


def test_ethernet_fields():
    headers = analyze_headers(_frame())
    assert isinstance(headers, PacketHeaders)
    assert isinstance(headers.ethernet, EthernetHeader)
    assert headers.ethernet.dst_mac == "02:00:00:00:00:01"
    assert headers.ethernet.src_mac == "02:00:00:00:00:02"
    assert headers.ethernet.ether_type == 0x0800
    assert headers.ethernet.protocol == "IPV4"
    assert headers.ethernet.protocol_hex == "0800"


def test_ipv4_fields():
    ip = analyze_headers(_frame(payload=b"abc")).ipv4
    assert isinstance(ip, Ipv4Header)
    assert ip.version == 4
    assert ip.header_length == "5 * 4 (bytes)"
    assert ip.services == "0x00"
    assert ip.total_length == 20 + 8 + 3
    assert ip.identification == f"0x1C46({0x1C46})"
    assert ip.flags == "0100000000000000"
    assert ip.ttl == 64
    assert ip.protocol == "UDP(17)"
    assert ip.protocol_number == 17
    assert ip.checksum == "0xABCD"
    assert ip.src_ip == "10.0.0.1"
    assert ip.dst_ip == "10.0.0.2"


def test_udp_fields():
    udp = analyze_headers(_frame(src_port=5000, dst_port=6000, payload=b"xy")).udp
    assert isinstance(udp, UdpHeader)
    assert udp.src_port == 5000
    assert udp.dst_port == 6000
    assert udp.length == 8 + 2
    assert udp.checksum == "0x1234"


def test_short_frame_rejected():
    with pytest.raises(ValueError):
        analyze_headers(b"\x00" * 41)


def test_plain_udp_info():
    frame = _frame(src_port=1234, dst_port=80, payload=b"payload")
    protocol, info = protocol_info("UDP", frame)
    assert protocol == "UDP"
    assert info == f"1234 → 80  Length: {len(frame) - 42}"


def test_short_udp_has_no_info():
    assert protocol_info("UDP", _frame()[:38]) == ("UDP", "")


def test_gvcp_ack():
    payload = bytes([0x00, 0x00, 0x00, 0x81, 0x00, 0x04]) + struct.pack(">H", 7)
    payload += struct.pack(">I", 42)
    frame = _frame(src_port=3956, dst_port=50000, payload=payload)
    protocol, info = protocol_info("UDP", frame)
    assert protocol == "GVCP"
    assert info == " < READREG_ACK   ID = 7   Val =42"


def test_gvcp_command():
    payload = bytes([0x42, 0x01, 0x00, 0x80, 0x00, 0x04]) + struct.pack(">H", 3)
    payload += bytes([0x00, 0x00, 0x0A, 0x00])
    frame = _frame(src_port=50000, dst_port=3956, payload=payload)
    protocol, info = protocol_info("UDP", frame)
    assert protocol == "GVCP"
    assert info == " > READREG_CMD   ID = 3   [Addr: 0x00000A00]"


def test_gvsp_leader():
    payload = bytes([0x00, 0x00, 0x00, 0x00, 0x81, 0x00, 0x00, 0x00])
    payload += struct.pack(">Q", 9) + struct.pack(">I", 3) + bytes(8)
    frame = _frame(src_port=3959, dst_port=50000, payload=payload)
    protocol, info = protocol_info("UDP", frame)
    assert protocol == "GVSP"
    assert info == " LEADER [Block ID: 9   Package ID: 3]"


def test_icmp_unknown_type():
    frame = bytearray(_frame(proto=1))
    frame[34] = 42
    frame[35] = 7
    protocol, info = protocol_info("ICMP", bytes(frame))
    assert protocol == "ICMP"
    assert info == "42 : 7"


def test_icmp_known_types_differ():
    request = bytearray(_frame(proto=1))
    request[34], request[35] = 8, 0
    reply = bytearray(request)
    reply[34] = 0
    _, request_info = protocol_info("ICMP", bytes(request))
    _, reply_info = protocol_info("ICMP", bytes(reply))
    assert request_info == "Echo request"
    assert reply_info != request_info


def test_other_protocol_falls_back_to_ports():
    frame = _frame(src_port=1, dst_port=2, proto=6)
    protocol, info = protocol_info("TCP", frame)
    assert protocol == "TCP"
    assert info.startswith("1 → 2")