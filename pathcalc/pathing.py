# pathcalc/pathing.py
"""
Point calculation for a path of Bezier segments.

calculate() runs three passes:

1. sample_segment / sample_path: walk every segment's parameter space with a
   small fixed step (200 samples per unit of density). These samples are not
   evenly spaced along the curve; their running arc length ("integral") is.
2. resample_uniform: walk the total arc length in steps of point_density and
   interpolate between the bracketing samples, carrying knot headings and
   segment boundaries over.
3. speed.process_keyframes: assign a target speed to every uniform point.

The joined sample list looks like

    A B B ... B C B B ... B C B B ... B D

A: first knot of the path (heading), B: curve samples,
C: last knot of a segment, shared with the next one (heading, boundary flag),
D: last knot of the path (heading, boundary flag).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from .bezier import evaluate
from .config import PathConfig
from .path_model import IndexRange, Path, Point, PointCalculationResult, Segment
from .speed import index_keyframes, process_keyframes, start_keyframe
from .units import Quantity, UnitOfLength

log = logging.getLogger(__name__)

SAMPLES_PER_CM = 200
# Absorbs float noise when the arc length is an exact multiple of the density
STEP_EPSILON = 1e-9


@dataclass
class SampleResult:
    ttd: float  # total travel distance, same as points[-1].integral
    points: List[Point]


def sample_interval(pc: PathConfig) -> float:
    """Parameter step used for the dense samples of every segment."""
    return Quantity(pc.point_density, pc.unit).to(UnitOfLength.CENTIMETER) / SAMPLES_PER_CM


def sample_segment(segment: Segment, pc: PathConfig, prev_integral: float = 0.0) -> List[Point]:
    """Dense samples of one segment, at least 2 points.

    The first sample is the first knot with its heading. The last sample is
    the last knot itself, flagged as the segment's last point, so the list
    ends exactly on the knot whatever the step rounding.
    """
    interval = sample_interval(pc)
    count = int(math.floor(1.0 / interval + STEP_EPSILON)) + 1

    points: List[Point] = []
    total = prev_integral
    last = segment.controls[0]
    for i in range(count):
        pos = evaluate(segment.controls, min(i * interval, 1.0))
        delta = pos.distance(last)
        total += delta
        points.append(Point(pos.x, pos.y, delta, total))
        last = pos

    points[0].heading = segment.first.heading

    knot = segment.last
    distance = math.hypot(knot.x - last.x, knot.y - last.y)
    final = Point(knot.x, knot.y, distance, total + distance, heading=knot.heading, is_last_point_of_segments=True)
    points.append(final)

    # Long and short segments get the same number of samples, so their raw
    # deltas are on different scales. Bring them to a common scale.
    seg_length = final.integral - prev_integral
    if seg_length > 0:
        ratio = (1.0 / interval) / (seg_length / pc.point_density)
        for point in points:
            point.delta *= ratio
    else:
        log.debug("segment %s has zero length, deltas left unscaled", segment.uid)

    return points


def sample_path(path: Path, pc: PathConfig) -> SampleResult:
    """Join the dense samples of all segments into one list."""
    rtn: List[Point] = []
    ttd = 0.0
    for idx, segment in enumerate(path.segments):
        first, *rest = sample_segment(segment, pc, ttd)
        # The first sample repeats the previous segment's last knot
        if idx == 0:
            rtn.append(first)
        rtn.extend(rest)
        ttd = rtn[-1].integral
    return SampleResult(ttd, rtn)


def resample_uniform(sample: SampleResult, pc: PathConfig, segment_count: int) -> Tuple[List[Point], List[IndexRange]]:
    """Evenly spaced points and the index range owned by each segment.

    Expects at least 2 samples. Returns at least 1 point and exactly
    segment_count ranges partitioning the points.
    """
    samples = sample.points
    ttd = sample.ttd

    num_steps = ttd / pc.point_density
    if not num_steps >= 1:
        num_steps = 1.0
    count = int(math.ceil(num_steps - STEP_EPSILON))

    points: List[Point] = []
    ranges: List[IndexRange] = []
    cursor = 1
    range_start = 0

    for i in range(count):
        target = i / num_steps * ttd

        heading = None
        crossed = 0
        while samples[cursor].integral < target and cursor + 1 < len(samples):
            s = samples[cursor]
            if s.heading is not None:
                heading = s.heading
            if s.is_last_point_of_segments:
                crossed += 1
            cursor += 1

        p1 = samples[cursor - 1]
        p2 = samples[cursor]
        span = p2.integral - p1.integral
        if span > 0:
            ratio = (target - p1.integral) / span
            point = Point(p1.x + (p2.x - p1.x) * ratio,
                          p1.y + (p2.y - p1.y) * ratio,
                          p1.delta + (p2.delta - p1.delta) * ratio,
                          target, heading=heading)
        else:
            point = Point(p1.x, p1.y, p1.delta, target, heading=heading)

        if crossed:
            ranges.append(IndexRange(range_start, len(points)))
            # Segments too short to own a point between two steps
            for _ in range(crossed - 1):
                ranges.append(IndexRange(len(points), len(points)))
            range_start = len(points)
            point.is_last_point_of_segments = True

        points.append(point)

    ranges.append(IndexRange(range_start, len(points)))
    # Zero-length segments at the very end are never crossed
    while len(ranges) < segment_count:
        ranges.append(IndexRange(len(points), len(points)))

    points[0].heading = samples[0].heading
    return points, ranges


def calculate(path: Path, pc: PathConfig) -> PointCalculationResult:
    """Uniformly spaced, speed-annotated points of a path.

    Pure: the path is only read and every call returns new points. An empty
    path gives an empty result with ttd 0.
    """
    if not path.segments:
        return PointCalculationResult(ttd=0.0)

    sample = sample_path(path, pc)
    points, ranges = resample_uniform(sample, pc, len(path.segments))

    keyframe_indexes = index_keyframes(path.segments, ranges)
    process_keyframes(points, [start_keyframe(), *keyframe_indexes], pc)

    # Exact path end; its speed is always 0
    knot = path.segments[-1].last
    points.append(Point(knot.x, knot.y, 0.0, sample.ttd, 0.0, knot.heading, True))

    log.debug("path %s: %d samples, %d points, ttd=%.4f",
              path.name, len(sample.points), len(points), sample.ttd)
    return PointCalculationResult(sample.ttd, points, ranges, keyframe_indexes)


def discrete_points(path: Path) -> List[Point]:
    """The first knot of the path and the last knot of every segment, no interpolation."""
    if not path.segments:
        return []
    first = path.segments[0].first
    rtn = [Point(first.x, first.y, 0.0, 0.0, heading=first.heading)]
    for segment in path.segments:
        knot = segment.last
        rtn.append(Point(knot.x, knot.y, 0.0, 0.0, heading=knot.heading, is_last_point_of_segments=True))
    return rtn
