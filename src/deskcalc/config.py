"""Calculator configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from deskcalc.exceptions import InvalidInputError
from deskcalc.state import DEFAULT_PRECISION
from deskcalc.validators import validate_positive, validate_range

MAX_PRECISION = 15
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CalculatorConfig:
    """
    Tunables shared by the engine and the dispatcher.

    Attributes:
        max_operand_length: Characters the display can hold while typing
        default_precision: Fraction digits shown at startup
        error_revert_delay: Seconds an error stays on the display
        epsilon: Zero tolerance for division, reciprocal and trig checks
        log_level: Level name used by the console front end
    """

    max_operand_length: int = 16
    default_precision: int = DEFAULT_PRECISION
    error_revert_delay: float = 2.0
    epsilon: float = 1e-12
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        validate_range(self.max_operand_length, min_val=1)
        validate_range(self.default_precision, min_val=0, max_val=MAX_PRECISION)
        validate_positive(self.error_revert_delay, allow_zero=True)
        validate_positive(self.epsilon)
        if self.log_level not in LOG_LEVELS:
            raise InvalidInputError(self.log_level, "Unknown log level")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> CalculatorConfig:
        """
        Build a config from ``DESKCALC_*`` environment variables.

        Recognised: ``DESKCALC_ERROR_REVERT_DELAY``, ``DESKCALC_PRECISION``
        and ``DESKCALC_LOG_LEVEL``. Unset variables keep their defaults.

        Raises:
            InvalidInputError: If a variable is not a number where one is expected
            OutOfRangeError: If a value is outside its allowed range
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        delay = env.get("DESKCALC_ERROR_REVERT_DELAY")
        if delay is not None:
            overrides["error_revert_delay"] = _number(delay, float)
        precision = env.get("DESKCALC_PRECISION")
        if precision is not None:
            overrides["default_precision"] = _number(precision, int)
        level = env.get("DESKCALC_LOG_LEVEL")
        if level is not None:
            overrides["log_level"] = level.upper()

        return cls(**overrides)


def _number(text: str, kind: type) -> int | float:
    try:
        return kind(text)
    except ValueError as e:
        raise InvalidInputError(text, f"Expected {kind.__name__}") from e
