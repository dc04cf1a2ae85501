"""Names for virtual key codes used as macro hot keys."""

from __future__ import annotations

KEY_NAMES: dict[int, str] = {
    0x01: "LBUTTON",
    0x02: "RBUTTON",
    0x03: "CANCEL",
    0x04: "MBUTTON",
    0x05: "XBUTTON1",
    0x06: "XBUTTON2",
    0x08: "BACK",
    0x09: "TAB",
    0x0C: "CLEAR",
    0x0D: "RETURN",
    0x10: "SHIFT",
    0x11: "CONTROL",
    0x12: "MENU",
    0x13: "PAUSE",
    0x14: "CAPITAL",
    0x1B: "ESCAPE",
    0x20: "SPACE",
    0x21: "PRIOR",
    0x22: "NEXT",
    0x23: "END",
    0x24: "HOME",
    0x25: "LEFT",
    0x26: "UP",
    0x27: "RIGHT",
    0x28: "DOWN",
    0x29: "SELECT",
    0x2A: "PRINT",
    0x2B: "EXECUTE",
    0x2C: "SNAPSHOT",
    0x2D: "INSERT",
    0x2E: "DELETE",
    0x2F: "HELP",
    **{code: chr(code) for code in range(0x30, 0x3A)},
    **{code: chr(code) for code in range(0x41, 0x5B)},
    0x5B: "LWIN",
    0x5C: "RWIN",
    0x5D: "APPS",
    0x5F: "SLEEP",
    **{0x60 + n: f"NUMPAD{n}" for n in range(10)},
    0x6A: "MULTIPLY",
    0x6B: "ADD",
    0x6C: "SEPARATOR",
    0x6D: "SUBTRACT",
    0x6E: "DECIMAL",
    0x6F: "DIVIDE",
    **{0x70 + n: f"F{n + 1}" for n in range(24)},
    0x90: "NUMLOCK",
    0x91: "SCROLL",
    0xA0: "LSHIFT",
    0xA1: "RSHIFT",
    0xA2: "LCONTROL",
    0xA3: "RCONTROL",
    0xA4: "LMENU",
    0xA5: "RMENU",
    0xA6: "BROWSER_BACK",
    0xA7: "BROWSER_FORWARD",
    0xA8: "BROWSER_REFRESH",
    0xA9: "BROWSER_STOP",
    0xAA: "BROWSER_SEARCH",
    0xAB: "BROWSER_FAVORITES",
    0xAC: "BROWSER_HOME",
    0xAD: "VOLUME_MUTE",
    0xAE: "VOLUME_DOWN",
    0xAF: "VOLUME_UP",
    0xB0: "MEDIA_NEXT_TRACK",
    0xB1: "MEDIA_PREV_TRACK",
    0xB2: "MEDIA_STOP",
    0xB3: "MEDIA_PLAY_PAUSE",
    0xB4: "LAUNCH_MAIL",
    0xB5: "LAUNCH_MEDIA_SELECT",
    0xB6: "LAUNCH_APP1",
    0xB7: "LAUNCH_APP2",
    0xBA: "OEM_1",
    0xBB: "OEM_PLUS",
    0xBC: "OEM_COMMA",
    0xBD: "OEM_MINUS",
    0xBE: "OEM_PERIOD",
    0xBF: "OEM_2",
    0xC0: "OEM_3",
    0xC1: "GAMEPAD_A",
    0xC2: "GAMEPAD_B",
    0xC3: "GAMEPAD_X",
    0xC4: "GAMEPAD_Y",
    0xC5: "GAMEPAD_R1",
    0xC6: "GAMEPAD_L1",
    0xC7: "GAMEPAD_R2",
    0xC8: "GAMEPAD_L2",
    0xC9: "GAMEPAD_OK",
    0xCA: "GAMEPAD_CANCEL",
    0xCB: "GAMEPAD_UP",
    0xCC: "GAMEPAD_DOWN",
    0xCD: "GAMEPAD_LEFT",
    0xCE: "GAMEPAD_RIGHT",
}


def key_name(code: int) -> str:
    """Return the name of a virtual key code, or an empty string if unknown."""
    return KEY_NAMES.get(code, "")


def stop_hint(code: int) -> str:
    """Status text telling which Alt hot key stops the running macro."""
    return f"Alt+{key_name(code)}: 停止执行"