"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyEvent`` values.
Handles ESC-sequence timing, control chords, and function keys.
"""

from __future__ import annotations

import os
import select

from .keys import BACKSPACE, DELETE, DOWN, ENTER, ESC, INSERT, LEFT, RIGHT, TAB, UP, KeyEvent, Mod

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": UP,
    b"B": DOWN,
    b"C": RIGHT,
    b"D": LEFT,
}
_SS3_FUNCTION_KEYS: dict[bytes, str] = {
    b"P": "F1",
    b"Q": "F2",
    b"R": "F3",
    b"S": "F4",
}
_TILDE_KEYS: dict[str, str] = {
    "2": INSERT,
    "3": DELETE,
    "15": "F5",
    "17": "F6",
    "18": "F7",
    "19": "F8",
    "20": "F9",
    "21": "F10",
    "23": "F11",
    "24": "F12",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_char(fd: int, first: bytes) -> str:
    raw = first
    for _ in range(_utf8_length(first[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        raw += nxt
    return raw.decode("utf-8", errors="replace")


def _decode_control(ch: bytes) -> KeyEvent | None:
    code = ch[0]
    if ch == b"\t":
        return KeyEvent(TAB)
    if ch in {b"\r", b"\n"}:
        return KeyEvent(ENTER)
    if ch in {b"\x08", b"\x7f"}:
        return KeyEvent(BACKSPACE)
    if 1 <= code <= 26:
        return KeyEvent.ctrl(chr(code + 96))
    return None


def _read_csi(fd: int) -> KeyEvent:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent(ESC)
    if seq in _CSI_FINAL_KEYS:
        return KeyEvent(_CSI_FINAL_KEYS[seq])

    # Parameterised sequences: ESC [ <digits> [; <mod>] (~ | A-D)
    params = seq
    while True:
        if not params[-1:].isdigit() and params[-1:] != b";":
            break
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent(ESC)
        params += part
        if len(params) > 16:
            return KeyEvent(ESC)

    final = params[-1:]
    fields = params[:-1].decode("ascii", errors="replace").split(";")
    mods = Mod.NONE
    if len(fields) > 1 and fields[1].isdigit():
        # xterm modifier parameter: 1 + (shift | alt << 1 | ctrl << 2)
        bits = int(fields[1]) - 1
        if bits & 1:
            mods |= Mod.SHIFT
        if bits & 2:
            mods |= Mod.ALT
        if bits & 4:
            mods |= Mod.CONTROL
    if final == b"~":
        key = _TILDE_KEYS.get(fields[0])
        return KeyEvent(key, mods) if key is not None else KeyEvent(ESC)
    if final in _CSI_FINAL_KEYS:
        return KeyEvent(_CSI_FINAL_KEYS[final], mods)
    return KeyEvent(ESC)


def read_key(fd: int, timeout_ms: int | None = None) -> KeyEvent | None:
    """Read one key event, or ``None`` when ``timeout_ms`` elapses first."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            return None

    if ch != b"\x1b":
        control = _decode_control(ch)
        if control is not None:
            return control
        return KeyEvent.char(_decode_char(fd, ch))

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent(ESC)
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return KeyEvent(ESC)
        if final in _SS3_FUNCTION_KEYS:
            return KeyEvent(_SS3_FUNCTION_KEYS[final])
        if final in _CSI_FINAL_KEYS:
            return KeyEvent(_CSI_FINAL_KEYS[final])
        return KeyEvent(ESC)
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return KeyEvent(ESC)
    if seq[0] < 0x20 or seq == b"\x7f":
        _PENDING_BYTES.append(seq)
        return KeyEvent(ESC)
    event = KeyEvent.char(_decode_char(fd, seq))
    return KeyEvent(event.key, event.mods | Mod.ALT)
