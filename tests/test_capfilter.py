from types import SimpleNamespace

from devtoolkit.capfilter import PacketFilter, completions, parse_filter


def _headers(src_ip="10.0.0.1", dst_ip="10.0.0.2", src_port="3956", dst_port="80"):
    return SimpleNamespace(
        ethernet=SimpleNamespace(src_mac="02:00:00:00:00:01", dst_mac="02:00:00:00:00:02"),
        ipv4=SimpleNamespace(src_ip=src_ip, dst_ip=dst_ip),
        udp=SimpleNamespace(src_port=src_port, dst_port=dst_port),
    )


def test_parse_filter_reads_pairs():
    flt = parse_filter("src.ip=10.0.0.1,dst.port=80")
    assert flt.src_ip == "10.0.0.1"
    assert flt.dst_port == "80"
    assert flt.dst_ip == ""
    assert not flt.is_empty()


def test_parse_filter_last_value_runs_to_end():
    flt = parse_filter("data.length=18")
    assert flt.data_length == "18"
    assert flt.src_mac == ""


def test_parse_empty_text_is_empty_filter():
    flt = parse_filter("")
    assert flt.is_empty()
    assert flt == PacketFilter()


def test_empty_filter_matches_everything():
    assert PacketFilter().matches(_headers(), 0) is True


def test_filter_matches_and_rejects_ip():
    flt = parse_filter("src.ip=10.0.0.1")
    assert flt.matches(_headers(), 10) is True
    assert flt.matches(_headers(src_ip="10.0.0.9"), 10) is False


def test_filter_ports_and_length():
    flt = parse_filter("src.port=3956,data.length=18")
    assert flt.matches(_headers(), 18) is True
    assert flt.matches(_headers(), 19) is False
    assert flt.matches(_headers(src_port="3959"), 18) is False


def test_filter_mac():
    flt = parse_filter("dst.mac=02:00:00:00:00:02")
    assert flt.matches(_headers(), 0) is True
    assert parse_filter("dst.mac=02:00:00:00:00:01").matches(_headers(), 0) is False


def test_completions_for_prefix():
    assert completions("src") == ["src.ip=", "src.mac=", "src.port="]


def test_completions_all_and_none():
    everything = completions("")
    assert len(everything) == 7
    assert everything == sorted(everything)
    assert completions("nothing") == []
    assert completions("port") == ["dst.port=", "src.port="]