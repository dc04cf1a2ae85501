"""Display filter for captured packets, written as ``key=value`` pairs."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

FILTER_KEYS: dict[str, str] = {
    "src.ip=": "src_ip",
    "dst.ip=": "dst_ip",
    "src.mac=": "src_mac",
    "dst.mac=": "dst_mac",
    "src.port=": "src_port",
    "dst.port=": "dst_port",
    "data.length=": "data_length",
}


@dataclass(frozen=True)
class PacketFilter:
    """Field constraints; an empty string means the field is not checked."""

    src_ip: str = ""
    dst_ip: str = ""
    src_mac: str = ""
    dst_mac: str = ""
    src_port: str = ""
    dst_port: str = ""
    data_length: str = ""

    def is_empty(self) -> bool:
        """True when no constraint is set."""
        return not any(getattr(self, f.name) for f in fields(self))

    def matches(self, headers: Any, payload_length: int) -> bool:
        """Check decoded headers against the filter.

        ``headers`` must expose ``ethernet.src_mac``/``dst_mac``,
        ``ipv4.src_ip``/``dst_ip`` and ``udp.src_port``/``dst_port``.
        """
        checks = (
            (self.src_ip, headers.ipv4.src_ip),
            (self.dst_ip, headers.ipv4.dst_ip),
            (self.src_mac, headers.ethernet.src_mac),
            (self.dst_mac, headers.ethernet.dst_mac),
            (self.src_port, headers.udp.src_port),
            (self.dst_port, headers.udp.dst_port),
            (self.data_length, payload_length),
        )
        return all(not wanted or wanted == str(actual) for wanted, actual in checks)


def parse_filter(text: str) -> PacketFilter:
    """Parse text such as ``src.ip=10.0.0.1,dst.port=80`` into a filter."""
    values: dict[str, str] = {}
    for key, name in FILTER_KEYS.items():
        index = text.find(key)
        if index < 0:
            continue
        end = text.find(",", index)
        if end < 0:
            end = len(text)
        values[name] = text[index + len(key):end]
    return PacketFilter(**values)


def completions(text: str) -> list[str]:
    """Return the filter keys that contain ``text``, in sorted order."""
    return sorted(key for key in FILTER_KEYS if text in key)