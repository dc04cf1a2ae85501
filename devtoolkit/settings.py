"""Persistent settings of the macro recorder, stored as a fixed 44-byte record."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from pathlib import Path
from typing import Union

RECORD_SIZE = 44
_LAYOUT = struct.Struct("<11i")

VK_F1 = 0x70
VK_F2 = 0x71
VK_F3 = 0x72


@dataclass
class MacroSettings:
    """Click and replay parameters plus the three Alt hot keys.

    The record holds eleven little-endian 32-bit integers: the four click
    values, a copy of the click count, the three replay values and the three
    hot keys.
    """

    click_times: int = 50
    click_interval: int = 8
    click_loops: int = 1
    click_loop_interval: int = 1000
    replay_times: int = 1
    replay_interval: int = 1
    replay_speed: int = 1000
    hotkey_click: int = VK_F1
    hotkey_record: int = VK_F2
    hotkey_replay: int = VK_F3

    @classmethod
    def from_bytes(cls, data: bytes) -> "MacroSettings":
        """Decode a settings record; bytes past the first 44 are ignored."""
        data = bytes(data)
        if len(data) < RECORD_SIZE:
            raise ValueError(f"settings record too short: {len(data)} bytes")
        values = _LAYOUT.unpack_from(data, 0)
        return cls(*values[:4], *values[5:])

    def to_bytes(self) -> bytes:
        """Encode the settings as a 44-byte record."""
        values = astuple(self)
        try:
            return _LAYOUT.pack(*values[:4], self.click_times, *values[4:])
        except struct.error as exc:
            raise ValueError(f"setting does not fit in 32 bits: {exc}") from exc

    @classmethod
    def load(cls, path: Union[str, Path]) -> "MacroSettings":
        """Read settings from ``path``.

        A missing or too short file is replaced by one holding the defaults,
        which are returned.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            data = b""
        if len(data) < RECORD_SIZE:
            settings = cls()
            settings.save(path)
            return settings
        return cls.from_bytes(data)

    def save(self, path: Union[str, Path]) -> None:
        """Write the settings record to ``path``, creating its directory."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())