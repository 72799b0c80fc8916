# Point calculation checks: dense sampling, joining and uniform resampling.
import math

import pytest

from .config import NumberRange, PathConfig, PathConfigError
from .geom import Control, EndPointControl
from .path_model import Keyframe, Path, PathChainError, Segment, validate_chain
from .pathing import (
    calculate, discrete_points, resample_uniform, sample_interval, sample_path, sample_segment
)
from .units import UnitOfLength


def _pc(density=1.0, unit=UnitOfLength.CENTIMETER, speed=(0.0, 100.0), app=(2.0, 8.0)):
    return PathConfig(NumberRange(*speed), NumberRange(*app), density, unit)


def _knot(x, y, heading=0.0):
    return EndPointControl(x, y, heading=heading)


def _chain(*knots):
    """Linear segments through knots; each knot object is shared by its two segments."""
    segs = [Segment.linear(knots[i], knots[i + 1]) for i in range(len(knots) - 1)]
    return Path(segs)


def _check_partition(result, n_segments):
    ranges = result.segment_indexes
    assert len(ranges) == n_segments
    assert ranges[0].start == 0
    for a, b in zip(ranges, ranges[1:]):
        assert a.end == b.start, "ranges must not leave gaps or overlap"
    # the synthetic terminal point belongs to no range
    assert ranges[-1].end == len(result.points) - 1


def test_sample_interval_uses_centimeters():
    assert sample_interval(_pc(1.0)) == pytest.approx(0.005)
    assert sample_interval(_pc(2.0, UnitOfLength.INCH)) == pytest.approx(2 * 2.54 / 200)


def test_segment_samples_end_on_knots():
    seg = Segment.cubic(_knot(0, 0, 90), Control(3, 8), Control(7, -4), _knot(10, 2, 180))
    pts = sample_segment(seg, _pc())
    assert (pts[0].x, pts[0].y) == (0, 0)
    assert pts[0].heading == 90
    assert (pts[-1].x, pts[-1].y) == (10, 2)
    assert pts[-1].heading == 180
    assert pts[-1].is_last_point_of_segments
    assert not any(p.is_last_point_of_segments for p in pts[:-1])
    # interval 0.005 -> t = 0, 0.005, ..., 1.0 plus the explicit knot
    assert len(pts) == 202


def test_segment_integral_is_seeded_and_monotonic():
    seg = Segment.linear(_knot(0, 0), _knot(4, 3))
    pts = sample_segment(seg, _pc(), prev_integral=7.0)
    assert pts[0].integral == 7.0
    assert pts[-1].integral == pytest.approx(12.0)
    for a, b in zip(pts, pts[1:]):
        assert b.integral >= a.integral


def test_segment_deltas_are_rescaled_to_density():
    # straight line of length 10, density 1: raw delta 0.05 scaled by 200 / 10
    seg = Segment.linear(_knot(0, 0), _knot(10, 0))
    pts = sample_segment(seg, _pc())
    assert pts[0].delta == 0
    for p in pts[1:-1]:
        assert p.delta == pytest.approx(1.0)


def test_rescaled_delta_does_not_depend_on_segment_length():
    short = sample_segment(Segment.linear(_knot(0, 0), _knot(5, 0)), _pc())
    long = sample_segment(Segment.linear(_knot(0, 0), _knot(50, 0)), _pc())
    assert short[10].delta == pytest.approx(long[10].delta)


def test_zero_length_segment_keeps_raw_deltas():
    pts = sample_segment(Segment.linear(_knot(1, 1), _knot(1, 1)), _pc())
    assert all(p.delta == 0 for p in pts)
    assert all(p.integral == 0 for p in pts)


def test_sample_path_drops_duplicate_boundary_sample():
    a, b, c = _knot(0, 0), _knot(5, 0, 90), _knot(5, 5)
    path = _chain(a, b, c)
    sample = sample_path(path, _pc())
    assert len(sample.points) == 202 + 201
    boundaries = [p for p in sample.points if p.is_last_point_of_segments]
    assert len(boundaries) == 2
    assert boundaries[0].heading == 90
    assert sample.ttd == sample.points[-1].integral
    assert sample.ttd == pytest.approx(10.0)


def test_scenario_straight_line():
    path = _chain(_knot(0, 0, 0), _knot(10, 0, 0))
    result = calculate(path, _pc())
    assert result.ttd == pytest.approx(10.0)
    xs = [p.x for p in result.points]
    assert xs == pytest.approx([float(i) for i in range(11)], abs=1e-6)
    assert result.points[0].heading == 0
    last = result.points[-1]
    assert (last.x, last.y) == (10, 0)
    assert last.heading == 0
    assert last.speed == 0
    _check_partition(result, 1)


def test_scenario_two_chained_segments():
    path = _chain(_knot(0, 0), _knot(5, 0), _knot(5, 5))
    validate_chain(path)
    result = calculate(path, _pc())
    assert result.ttd == pytest.approx(10.0)
    integrals = [p.integral for p in result.points]
    steps = [b - a for a, b in zip(integrals, integrals[1:])]
    # no jump and no duplicate at the boundary
    assert all(s == pytest.approx(1.0) for s in steps[:-1])
    _check_partition(result, 2)
    # the point opening the second range sits on the second segment
    second = result.points[result.segment_indexes[1].start]
    assert second.is_last_point_of_segments
    assert second.x == pytest.approx(5.0)


def test_output_spacing_matches_density_on_curves():
    seg = Segment.cubic(_knot(0, 0), Control(0, 30), Control(40, 30), _knot(40, 0))
    pc = _pc(2.0)
    result = calculate(Path([seg]), pc)
    pts = result.points
    assert pts
    for a, b in zip(pts[:-1], pts[1:-1]):
        assert b.integral >= a.integral
        assert abs((b.integral - a.integral) - pc.point_density) < 1e-9
        # chord between neighbours never exceeds the arc length between them
        assert math.hypot(b.x - a.x, b.y - a.y) <= pc.point_density + 1e-6
    assert pts[-1].integral == pytest.approx(result.ttd)


def test_integral_is_non_decreasing_including_terminal():
    path = _chain(_knot(0, 0), _knot(3.3, 1.1), _knot(-2, 7), _knot(0, 0))
    result = calculate(path, _pc(0.7))
    integrals = [p.integral for p in result.points]
    assert integrals == sorted(integrals)
    _check_partition(result, 3)


def test_short_segment_between_steps_gets_empty_range():
    # both ends of the middle segment (0.1 long) fall between targets 4 and 5
    path = _chain(_knot(0, 0), _knot(4.2, 0), _knot(4.3, 0), _knot(10, 0))
    result = calculate(path, _pc())
    _check_partition(result, 3)
    assert result.segment_indexes[1].is_empty()


def test_trailing_zero_length_segment_gets_empty_range():
    end = _knot(10, 0)
    path = Path([Segment.linear(_knot(0, 0), end), Segment.linear(end, _knot(10, 0, 45))])
    result = calculate(path, _pc())
    _check_partition(result, 2)
    assert result.segment_indexes[1].is_empty()
    assert result.points[-1].heading == 45


def test_path_shorter_than_density_yields_one_point_plus_end():
    path = _chain(_knot(0, 0, 30), _knot(0.4, 0, 60))
    result = calculate(path, _pc())
    assert len(result.points) == 2
    assert result.points[0].heading == 30
    assert (result.points[1].x, result.points[1].y) == (0.4, 0)
    _check_partition(result, 1)


def test_zero_length_path():
    path = _chain(_knot(2, 2), _knot(2, 2))
    result = calculate(path, _pc())
    assert result.ttd == 0
    assert [(p.x, p.y) for p in result.points] == [(2, 2), (2, 2)]


def test_empty_path():
    result = calculate(Path([]), _pc())
    assert result.ttd == 0
    assert result.points == []
    assert result.segment_indexes == []
    assert result.keyframe_indexes == []


def test_inputs_are_not_mutated():
    seg = Segment.cubic(_knot(0, 0, 10), Control(1, 5), Control(6, 5), _knot(7, 0, 170))
    seg.speed_profiles.append(Keyframe(0.5, 0.3, True))
    path = Path([seg])
    before = [(cp.x, cp.y, cp.uid) for cp in seg.controls]
    first = calculate(path, _pc(0.5))
    second = calculate(path, _pc(0.5))
    assert [(cp.x, cp.y, cp.uid) for cp in seg.controls] == before
    assert [(p.x, p.y, p.speed) for p in first.points] == [(p.x, p.y, p.speed) for p in second.points]
    assert first.points[0] is not second.points[0]


def test_units_scale_sampling_not_geometry():
    path = _chain(_knot(0, 0), _knot(20, 0))
    cm = calculate(path, _pc(2.0, UnitOfLength.CENTIMETER))
    inch = calculate(path, _pc(2.0, UnitOfLength.INCH))
    assert cm.ttd == pytest.approx(inch.ttd)
    assert len(cm.points) == len(inch.points) == 11


def test_resample_requires_segment_count_ranges():
    path = _chain(_knot(0, 0), _knot(3, 0), _knot(6, 0))
    sample = sample_path(path, _pc())
    points, ranges = resample_uniform(sample, _pc(), 2)
    assert len(ranges) == 2
    assert ranges[-1].end == len(points)


def test_discrete_points():
    path = _chain(_knot(0, 0, 5), _knot(1, 0, 15), _knot(1, 1, 25))
    pts = discrete_points(path)
    assert [(p.x, p.y, p.heading) for p in pts] == [(0, 0, 5), (1, 0, 15), (1, 1, 25)]
    assert discrete_points(Path([])) == []


def test_validate_chain_rejects_detached_segments():
    a = Segment.linear(_knot(0, 0), _knot(1, 0))
    b = Segment.linear(_knot(1, 0), _knot(2, 0))
    with pytest.raises(PathChainError):
        validate_chain(Path([a, b]))
    c = Segment.linear(_knot(5, 5), _knot(6, 0))
    with pytest.raises(PathChainError):
        validate_chain(Path([a, c]))


def test_config_rejects_non_positive_density():
    with pytest.raises(PathConfigError):
        _pc(0.0)


def run():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()


if __name__ == "__main__":
    run()
