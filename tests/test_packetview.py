import pytest

from devtoolkit.packet import analyze_headers
from devtoolkit.packetview import cells_for_range, gige_tree, hex_dump_rows, packet_tree


def _frame(src_port, dst_port, payload=b""):
    eth = bytes.fromhex("020000000001") + bytes.fromhex("020000000002") + b"\x08\x00"
    ip = bytes([0x45, 0, 0, 28, 0, 1, 0x40, 0, 64, 17, 0, 0, 10, 0, 0, 1, 10, 0, 0, 2])
    udp = src_port.to_bytes(2, "big") + dst_port.to_bytes(2, "big") + bytes([0, 8, 0, 0])
    return eth + ip + udp + payload


def test_cells_for_range_wraps_rows():
    assert cells_for_range(15, 2) == [(0, 15), (1, 0)]


def test_cells_for_range_invariant():
    cells = cells_for_range(30, 40)
    assert len(cells) == 40
    assert [r * 16 + c for r, c in cells] == list(range(30, 70))
    assert all(0 <= c < 16 for _, c in cells)


def test_cells_for_range_negative():
    with pytest.raises(ValueError):
        cells_for_range(-1, 3)


def test_hex_dump_rows_small():
    assert hex_dump_rows(b"AB\x00") == [(["41", "42", "00"], "A B . ")]


def test_hex_dump_rows_shape():
    rows = hex_dump_rows(bytes(range(40)))
    assert len(rows) == 3
    assert [len(cells) for cells, _ in rows] == [16, 16, 8]
    assert all(len(text) == 2 * len(cells) for cells, text in rows)


def test_packet_tree_plain_udp():
    data = _frame(5000, 6000, b"hello")
    nodes = packet_tree(data, analyze_headers(data), "UDP")
    assert len(nodes) == 4
    assert nodes[0].label.startswith("Ethernet Ⅱ, Mac: ")
    assert (nodes[0].offset, nodes[0].length) == (0, 14)
    port = nodes[2].find("Source Port: 5000")
    assert port is not None and (port.offset, port.length) == (34, 2)
    assert nodes[3].label == f"Data({len(data) - 42} byte)"


def test_packet_tree_gvcp_uses_gige():
    data = _frame(50000, 3956, bytes(14))
    nodes = packet_tree(data, analyze_headers(data), "GVCP")
    assert nodes[3].label == "GigE Vision Control Protocol"


def test_gige_tree_none_for_other_ports():
    assert gige_tree(_frame(1, 2, bytes(60))) is None


def test_gige_tree_gvcp_ack():
    payload = bytes([0, 0, 0, 0x81, 0, 4, 0, 7, 1, 2, 3, 4])
    tree = gige_tree(_frame(3956, 50000, payload))
    labels = [child.label for child in tree.children]
    assert tree.label == "GigE Vision Control Protocol"
    assert labels[0] == "Status: 0x0000"
    assert labels[-1] == "Register: 0x01020304"
    assert (tree.children[0].offset, tree.children[0].length) == (42, 2)


def test_gige_tree_gvsp_trailer():
    payload = bytearray(60)
    payload[4] = 0x82
    payload[24:28] = (480).to_bytes(4, "big")
    tree = gige_tree(_frame(3959, 50000, bytes(payload)))
    assert tree.label == "GigE Vision Streaming Protocol"
    assert tree.find("Size Y: 480") is not None


def test_gige_tree_gvsp_leader_image():
    payload = bytearray(60)
    payload[4] = 0x81
    payload[36:40] = (640).to_bytes(4, "big")
    tree = gige_tree(_frame(3959, 50000, bytes(payload)))
    node = tree.find("X: 640")
    assert node is not None and node.offset == 78


def test_gige_tree_short_frame():
    with pytest.raises(ValueError):
        gige_tree(b"\x00" * 10)