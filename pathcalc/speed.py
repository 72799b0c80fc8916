# pathcalc/speed.py
"""
Speed keyframes: place per-segment keyframes onto the resampled points and
assign every point a target speed.

Each keyframe is responsible for the points from its own index up to the
next keyframe's index. Inside that range the normalized speed ramps linearly
from the keyframe's y_pos toward the next keyframe's y_pos and is mapped onto
speed_limit. A keyframe with follow_curve set additionally caps the speed by
the point's rescaled delta, which grows where the curve is sampled sparsely
(i.e. where it is straight) and shrinks in tight bends.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .config import PathConfig
from .path_model import IndexRange, Keyframe, KeyframeIndexing, Point, Segment

log = logging.getLogger(__name__)


def start_keyframe() -> KeyframeIndexing:
    """Implicit full-speed keyframe at the first point of every path."""
    return KeyframeIndexing(0, None, Keyframe(0.0, 1.0, follow_curve=False))


def index_keyframes(segments: Sequence[Segment], segment_indexes: Sequence[IndexRange]) -> List[KeyframeIndexing]:
    """Map every segment keyframe onto an absolute point index.

    Keyframes of a segment are expected sorted by x_pos. Segments that own no
    points contribute no keyframes.
    """
    ikf: List[KeyframeIndexing] = []
    for segment, idx_range in zip(segments, segment_indexes):
        if idx_range.is_empty():
            continue
        for kf in segment.speed_profiles:
            index = idx_range.start + int(math.floor(len(idx_range) * kf.x_pos))
            ikf.append(KeyframeIndexing(index, segment, kf))
    return ikf


def process_keyframe(keyframe: Keyframe, pc: PathConfig, responsible: Sequence[Point],
                     next_keyframe: Optional[Keyframe] = None) -> None:
    """Write speeds into the points this keyframe is responsible for."""
    limit_from = pc.speed_limit.start
    limit_diff = pc.speed_limit.span
    app_from = pc.application_range.start
    app_to = pc.application_range.end
    app_diff = pc.application_range.span

    use_ratio = limit_diff != 0 and app_diff != 0
    application_ratio = limit_diff / app_diff if use_ratio else 0.0

    y_from = keyframe.y_pos
    y_to = next_keyframe.y_pos if next_keyframe is not None else y_from
    y_diff = y_to - y_from

    length = len(responsible)
    for i, point in enumerate(responsible):
        y = y_from + y_diff * i / length
        speed = limit_from + limit_diff * y

        if keyframe.follow_curve:
            delta = point.delta
            if delta < app_from and delta != 0:
                speed = min(speed, limit_from)
            elif delta > app_to:
                speed = min(speed, pc.speed_limit.end)
            elif use_ratio and delta != 0:
                speed = min(speed, limit_from + (delta - app_from) * application_ratio)

        point.speed = speed


def process_keyframes(points: List[Point], keyframes: Sequence[KeyframeIndexing], pc: PathConfig) -> None:
    for i, current in enumerate(keyframes):
        nxt = keyframes[i + 1] if i + 1 < len(keyframes) else None
        end = nxt.index if nxt is not None else len(points)
        responsible = points[current.index:end]
        process_keyframe(current.keyframe, pc, responsible, nxt.keyframe if nxt is not None else None)
    log.debug("applied %d speed keyframes to %d points", len(keyframes), len(points))
