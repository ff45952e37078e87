"""Rendering of calculator values as display text."""

from __future__ import annotations

import math

from deskcalc.state import BaseMode, CalculatorState, DisplayMode
from deskcalc.validators import to_int64, to_unsigned64

# NORMAL mode switches to scientific notation outside this magnitude window
AUTO_SCIENTIFIC_ABOVE = 1e10
AUTO_SCIENTIFIC_BELOW = 1e-7

_RADIX_FORMAT = {
    BaseMode.HEX: "X",
    BaseMode.OCT: "o",
    BaseMode.BIN: "b",
}


def format_value(
    value: float, display_mode: DisplayMode, base_mode: BaseMode, precision: int
) -> str:
    """
    Render ``value`` for the display.

    Normal mode groups thousands with ``,`` and shows at most ``precision``
    fraction digits, falling back to scientific notation for very large or
    very small magnitudes. Scientific mode always uses ``<mantissa>E<exp>``.
    Programmer mode truncates to a signed 64-bit integer; negative values in
    HEX, OCT and BIN show their two's-complement bit pattern.

    Examples:
        >>> format_value(1234.5, DisplayMode.NORMAL, BaseMode.DEC, 10)
        '1,234.5'
        >>> format_value(1500, DisplayMode.SCIENTIFIC, BaseMode.DEC, 10)
        '1.5E3'
        >>> format_value(-1, DisplayMode.PROGRAMMER, BaseMode.HEX, 10)
        'FFFFFFFFFFFFFFFF'
    """
    if display_mode is DisplayMode.PROGRAMMER:
        return format_integer(to_int64(value), base_mode)

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if value == 0:
        return "0"

    if display_mode is DisplayMode.SCIENTIFIC:
        return format_scientific(value, precision)

    magnitude = abs(value)
    if magnitude > AUTO_SCIENTIFIC_ABOVE or magnitude < AUTO_SCIENTIFIC_BELOW:
        return format_scientific(value, precision)
    return format_grouped(value, precision)


def format_integer(value: int, base_mode: BaseMode) -> str:
    if base_mode is BaseMode.DEC:
        return str(value)
    return format(to_unsigned64(value), _RADIX_FORMAT[base_mode])


def format_grouped(value: float, precision: int) -> str:
    text = f"{value:,.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_scientific(value: float, precision: int) -> str:
    mantissa, exponent = f"{value:.{precision}E}".split("E")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}E{int(exponent)}"


class NumericFormatter:
    """Turns a calculator state into the text the display should show."""

    def format(
        self, value: float, display_mode: DisplayMode, base_mode: BaseMode, precision: int
    ) -> str:
        return format_value(value, display_mode, base_mode, precision)

    def display_text(self, state: CalculatorState) -> str:
        """Error message, the operand being typed, or the formatted value."""
        if state.error_state:
            return state.error_message
        if not state.start_new_number:
            return state.operand_text
        if state.current_value == 0:
            return "0"
        return self.format(
            state.current_value,
            state.display_mode,
            state.base_mode,
            state.decimal_precision,
        )
