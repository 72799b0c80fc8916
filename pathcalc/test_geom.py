# Heading and vector helpers.
import dataclasses
import math

import pytest

from .geom import (
    Control, EndPointControl, Vector, bound_angle, bound_heading, heading_of, heading_to_angle, same_position
)


def test_bound_heading():
    assert bound_heading(0) == 0
    assert bound_heading(360) == 0
    assert bound_heading(-90) == 270
    assert bound_heading(725) == pytest.approx(5)
    assert bound_heading(-1e-17) == 0


def test_bound_angle():
    assert bound_angle(3 * math.pi) == pytest.approx(math.pi)
    assert bound_angle(-math.pi) == pytest.approx(math.pi)
    assert bound_angle(0.5) == 0.5


def test_heading_to_angle():
    assert heading_to_angle(0) == pytest.approx(math.pi / 2)
    assert heading_to_angle(90) == pytest.approx(0)
    assert heading_to_angle(180) == pytest.approx(-math.pi / 2)
    assert heading_to_angle(225) == pytest.approx(-3 * math.pi / 4)


def test_vector_ops_return_new_vectors():
    a = Vector(1.0, 2.0)
    b = Vector(4.0, 6.0)
    assert a.add(b) == Vector(5.0, 8.0)
    assert b.subtract(a) == Vector(3.0, 4.0)
    assert a.multiply(2) == Vector(2.0, 4.0)
    assert b.divide(2) == Vector(2.0, 3.0)
    assert a.distance(b) == 5.0
    assert a.lerp(b, 0.5) == Vector(2.5, 4.0)
    assert a.mirror(b) == Vector(-2.0, -2.0)
    p = a.interpolate(b, 10.0)
    assert (p.x, p.y) == pytest.approx((7.0, 10.0))
    assert a == Vector(1.0, 2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.x = 3.0


def test_controls_compare_by_identity():
    a = Control(1.0, 1.0)
    b = Control(1.0, 1.0)
    assert a != b
    assert a == a
    assert same_position(a, b)
    assert len({a, b}) == 2


def test_end_point_heading_is_normalized():
    knot = EndPointControl(0.0, 0.0, heading=-45)
    assert knot.heading == 315
    assert heading_of(knot) == 315
    assert heading_of(Control(0.0, 0.0)) is None


def run():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()


if __name__ == "__main__":
    run()
