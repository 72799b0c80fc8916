# pathcalc/geom.py
"""
Plane geometry for path controls.

Headings are in degrees, start at north (+y) and grow clockwise in [0, 360).
Angles are in radians, start at east (+x) and grow counter-clockwise in (-pi, pi].
"""

from __future__ import annotations

import math
import random
import string
from dataclasses import dataclass, field
from typing import ClassVar, Optional

_UID_ALPHABET = string.ascii_letters + string.digits


def make_id(length: int = 10) -> str:
    return "".join(random.choice(_UID_ALPHABET) for _ in range(length))


def bound_heading(num: float) -> float:
    """Wrap a heading into [0, 360)."""
    num = float(num) % 360.0
    if num < 0:
        num += 360.0
    # -1e-17 % 360 rounds up to 360.0
    return 0.0 if num >= 360.0 else num


def bound_angle(num: float) -> float:
    """Wrap an angle in radians into (-pi, pi]."""
    while num > math.pi:
        num -= 2 * math.pi
    while num <= -math.pi:
        num += 2 * math.pi
    return num


def heading_to_angle(heading_deg: float) -> float:
    return bound_angle(math.radians(90.0 - heading_deg))


@dataclass(frozen=True)
class Vector:
    x: float
    y: float

    def add(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def multiply(self, k: float) -> "Vector":
        return Vector(self.x * k, self.y * k)

    def divide(self, k: float) -> "Vector":
        return Vector(self.x / k, self.y / k)

    def distance(self, other: "Vector") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def interpolate(self, other: "Vector", distance: float) -> "Vector":
        """Point `distance` away from self in the direction of other."""
        angle = math.atan2(other.y - self.y, other.x - self.x)
        return Vector(self.x + distance * math.cos(angle), self.y + distance * math.sin(angle))

    def lerp(self, other: "Vector", ratio: float) -> "Vector":
        return Vector(self.x + (other.x - self.x) * ratio, self.y + (other.y - self.y) * ratio)

    def mirror(self, other: "Vector") -> "Vector":
        """Reflect other through self."""
        return Vector(2 * self.x - other.x, 2 * self.y - other.y)


@dataclass(frozen=True, eq=False)
class Control(Vector):
    """Interior shape point of a segment. Controls are entities: equality is identity."""

    kind: ClassVar[str] = "control"

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    uid: str = field(default_factory=make_id)
    lock: bool = False
    visible: bool = True


@dataclass(frozen=True, eq=False)
class EndPointControl(Control):
    """Segment knot; the only control kind that carries a heading."""

    kind: ClassVar[str] = "end-point"

    heading: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "heading", bound_heading(self.heading))


def same_position(a: Vector, b: Vector, tol: float = 0.0) -> bool:
    return abs(a.x - b.x) <= tol and abs(a.y - b.y) <= tol


def heading_of(control: Control) -> Optional[float]:
    """Heading of a knot, None for interior controls."""
    if control.kind != EndPointControl.kind:
        return None
    return getattr(control, "heading", None)
