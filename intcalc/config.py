"""intcalc.config

Calculator settings: integer width and nesting limit.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_BITS = 32
DEFAULT_MAX_DEPTH = 200
# the recognizer and the tree printers recurse on each nesting level,
# so this stays well under the interpreter recursion limit
MAX_DEPTH = 300
MIN_BITS = 2
# keeps decimal bounds well under the interpreter's int<->str digit limit
MAX_BITS = 4096


@dataclass(frozen=True)
class IntWidth:
    """Two's complement signed integer range of a given bit width"""
    bits: int

    def __post_init__(self) -> None:
        if not MIN_BITS <= self.bits <= MAX_BITS:
            raise ValueError(f"integer width must be {MIN_BITS} to {MAX_BITS} bits, got {self.bits}")

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def __str__(self) -> str:
        return f"i{self.bits}"


@dataclass(frozen=True)
class CalculatorConfig:
    """Integer width and nesting limit for one calculator"""
    bits: int = DEFAULT_BITS
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        # Raises for bad widths.
        IntWidth(self.bits)
        if not 1 <= self.max_depth <= MAX_DEPTH:
            raise ValueError(f"max_depth must be 1 to {MAX_DEPTH}, got {self.max_depth}")

    @property
    def width(self) -> IntWidth:
        return IntWidth(self.bits)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CalculatorConfig":
        """Build a config from INTCALC_BITS / INTCALC_MAX_DEPTH.

        Unset variables fall back to the defaults; values that are not
        integers raise ValueError.
        """
        env = os.environ if environ is None else environ
        bits = _int_setting(env, "INTCALC_BITS", DEFAULT_BITS)
        max_depth = _int_setting(env, "INTCALC_MAX_DEPTH", DEFAULT_MAX_DEPTH)
        return cls(bits=bits, max_depth=max_depth)


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
