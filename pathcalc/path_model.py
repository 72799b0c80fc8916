# pathcalc/path_model.py
"""
Path entities passed into the point calculation, and the result it returns.

Segments, controls and keyframes are built by the editing layer; Point and
PointCalculationResult are only ever produced by pathing.calculate().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from .geom import Control, EndPointControl, make_id


class SegmentError(ValueError):
    """A segment does not have the shape of a Bezier segment."""


class KeyframeError(ValueError):
    """A keyframe position is outside its allowed range."""


class PathChainError(ValueError):
    """Consecutive segments do not share their knot."""


@dataclass
class Keyframe:
    x_pos: float  # [0, 1], along the segment's resampled points
    y_pos: float  # [0, 1], normalized target speed
    follow_curve: bool = False
    uid: str = field(default_factory=make_id)

    def __post_init__(self):
        if not 0.0 <= self.x_pos <= 1.0:
            raise KeyframeError(f"x_pos must be in [0, 1], got {self.x_pos}")
        if not 0.0 <= self.y_pos <= 1.0:
            raise KeyframeError(f"y_pos must be in [0, 1], got {self.y_pos}")


AnyControl = Union[EndPointControl, Control]


class Segment:
    """One Bezier curve between two knots."""

    def __init__(self, controls: Sequence[AnyControl], speed_profiles: Optional[List[Keyframe]] = None,
                 uid: Optional[str] = None):
        controls = list(controls)
        if len(controls) < 2:
            raise SegmentError(f"a segment needs at least 2 controls, got {len(controls)}")
        if controls[0].kind != EndPointControl.kind or controls[-1].kind != EndPointControl.kind:
            raise SegmentError("the first and last controls of a segment must be end points")
        self.controls: List[AnyControl] = controls
        self.speed_profiles: List[Keyframe] = list(speed_profiles or [])
        self.uid = uid or make_id()

    @classmethod
    def linear(cls, first: EndPointControl, last: EndPointControl) -> "Segment":
        return cls([first, last])

    @classmethod
    def cubic(cls, first: EndPointControl, c1: Control, c2: Control, last: EndPointControl) -> "Segment":
        return cls([first, c1, c2, last])

    @property
    def first(self) -> EndPointControl:
        return self.controls[0]  # type: ignore[return-value]

    @property
    def last(self) -> EndPointControl:
        return self.controls[-1]  # type: ignore[return-value]

    @property
    def degree(self) -> int:
        return len(self.controls) - 1

    def is_linear(self) -> bool:
        return self.degree == 1

    def is_cubic(self) -> bool:
        return self.degree == 3

    def is_visible(self) -> bool:
        return any(cp.visible for cp in self.controls)

    def __repr__(self) -> str:
        pts = ", ".join(f"({cp.x:g}, {cp.y:g})" for cp in self.controls)
        return f"Segment[{pts}]"


class Path:
    def __init__(self, segments: Optional[List[Segment]] = None, name: str = "Path", uid: Optional[str] = None):
        self.segments: List[Segment] = list(segments or [])
        self.name = name
        self.uid = uid or make_id()
        self.lock = False
        self.visible = True

    @property
    def controls(self) -> List[AnyControl]:
        """All controls in order, shared knots listed once."""
        rtn: List[AnyControl] = []
        for i, segment in enumerate(self.segments):
            if i == 0:
                rtn.append(segment.first)
            rtn.extend(segment.controls[1:])
        return rtn


def validate_chain(path: Path) -> None:
    """Raise PathChainError unless every segment starts at the previous segment's last knot."""
    for i in range(1, len(path.segments)):
        prev_last = path.segments[i - 1].last
        first = path.segments[i].first
        if first is not prev_last:
            if first.x == prev_last.x and first.y == prev_last.y and first.heading == prev_last.heading:
                raise PathChainError(f"segment {i} starts at a copy of the previous knot, not the knot itself")
            raise PathChainError(
                f"segment {i} starts at ({first.x:g}, {first.y:g}) "
                f"but segment {i - 1} ends at ({prev_last.x:g}, {prev_last.y:g})"
            )


@dataclass
class Point:
    """One calculated sample along the path."""

    x: float
    y: float
    delta: float  # distance to the previous sample, rescaled per segment
    integral: float  # arc length from the path start
    speed: float = 0.0
    heading: Optional[float] = None
    is_last_point_of_segments: bool = False


@dataclass
class IndexRange:
    start: int
    end: int  # exclusive

    def __len__(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.end == self.start


@dataclass
class KeyframeIndexing:
    index: int
    segment: Optional[Segment]  # None for the implicit start keyframe
    keyframe: Keyframe


@dataclass
class PointCalculationResult:
    ttd: float  # total travel distance
    points: List[Point] = field(default_factory=list)
    segment_indexes: List[IndexRange] = field(default_factory=list)
    keyframe_indexes: List[KeyframeIndexing] = field(default_factory=list)
