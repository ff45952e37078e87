"""Translation of key presses into dispatcher command tokens."""

from __future__ import annotations

from deskcalc.dispatcher import CLEAR_ALL
from deskcalc.state import BaseMode, DisplayMode

_CHARACTER_KEYS = {
    ".": ".",
    ",": ".",
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "%": "%",
    "=": "=",
}

_NAMED_KEYS = {
    "Return": "=",
    "Enter": "=",
    "KP_Enter": "=",
    "BackSpace": "CE",
    "Escape": CLEAR_ALL,
}

_CTRL_KEYS = {"z": "Undo", "y": "Redo"}


def key_to_command(
    key: str,
    ctrl: bool = False,
    display_mode: DisplayMode = DisplayMode.NORMAL,
    base_mode: BaseMode = BaseMode.DEC,
) -> str | None:
    """
    Map a key to a command token, or None if the key does nothing.

    ``key`` is either the typed character or a key name such as ``"Return"``.
    Hex letters only count in programmer mode with the HEX base.

    Examples:
        >>> key_to_command("7")
        '7'
        >>> key_to_command("Escape")
        'AC'
        >>> key_to_command("z", ctrl=True)
        'Undo'
        >>> key_to_command("f", display_mode=DisplayMode.PROGRAMMER, base_mode=BaseMode.HEX)
        'F'
    """
    if ctrl:
        return _CTRL_KEYS.get(key.lower())
    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    if len(key) != 1:
        return None
    if key.isdigit() and key.isascii():
        return key
    if key in _CHARACTER_KEYS:
        return _CHARACTER_KEYS[key]
    if key.upper() in "ABCDEF" and (
        display_mode is DisplayMode.PROGRAMMER and base_mode is BaseMode.HEX
    ):
        return key.upper()
    return None
