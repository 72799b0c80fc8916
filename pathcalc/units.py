# pathcalc/units.py
"""
Length units used by path coordinates and point density.
Every unit is expressed as a multiple of one centimeter.
"""

from __future__ import annotations

from enum import Enum


class UnitOfLength(Enum):
    MILLIMETER = 0.1
    CENTIMETER = 1.0
    METER = 100.0
    INCH = 2.54
    FOOT = 30.48
    TILE = 60.96  # 24 inches

    @classmethod
    def from_name(cls, name: str) -> "UnitOfLength":
        """Resolve a short unit name ("cm", "in", ...) or an enum member name."""
        key = str(name).strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError(f"unknown unit of length: {name!r}") from None

    @property
    def short_name(self) -> str:
        for alias, unit in _ALIASES.items():
            if unit is self:
                return alias
        return self.name.lower()


_ALIASES = {
    "mm": UnitOfLength.MILLIMETER,
    "cm": UnitOfLength.CENTIMETER,
    "m": UnitOfLength.METER,
    "in": UnitOfLength.INCH,
    "ft": UnitOfLength.FOOT,
    "tile": UnitOfLength.TILE,
}


class UnitConverter:
    """Convert values between unit alpha and unit beta."""

    def __init__(self, alpha: UnitOfLength, beta: UnitOfLength):
        self.alpha = alpha
        self.beta = beta

    def from_a_to_b(self, a: float) -> float:
        return a * self.alpha.value / self.beta.value

    def from_b_to_a(self, b: float) -> float:
        return b * self.beta.value / self.alpha.value


class Quantity:
    """A value tagged with its unit of length."""

    def __init__(self, value: float, unit: UnitOfLength = UnitOfLength.CENTIMETER):
        self.value = float(value)
        self.unit = unit

    def to(self, unit: UnitOfLength) -> float:
        return UnitConverter(self.unit, unit).from_a_to_b(self.value)

    def __repr__(self) -> str:
        return f"Quantity({self.value!r}, {self.unit.short_name})"
