# pathcalc/storage.py
"""Path documents on disk (JSON)."""

from __future__ import annotations

import json
import os
from typing import List

from .geom import Control, EndPointControl, same_position
from .path_model import AnyControl, Keyframe, Path, Segment


def control_to_dict(cp: AnyControl) -> dict:
    rtn = {"__type": cp.kind, "uid": cp.uid, "x": cp.x, "y": cp.y, "lock": cp.lock, "visible": cp.visible}
    if cp.kind == EndPointControl.kind:
        rtn["heading"] = cp.heading  # type: ignore[union-attr]
    return rtn


def control_from_dict(data: dict) -> AnyControl:
    kind = data.get("__type", Control.kind)
    common = dict(
        x=float(data["x"]),
        y=float(data["y"]),
        lock=bool(data.get("lock", False)),
        visible=bool(data.get("visible", True)),
    )
    if data.get("uid"):
        common["uid"] = str(data["uid"])
    if kind == EndPointControl.kind:
        return EndPointControl(heading=float(data.get("heading", 0.0)), **common)
    if kind == Control.kind:
        return Control(**common)
    raise ValueError(f"unknown control type: {kind!r}")


def keyframe_to_dict(kf: Keyframe) -> dict:
    return {"uid": kf.uid, "x_pos": kf.x_pos, "y_pos": kf.y_pos, "follow_curve": kf.follow_curve}


def keyframe_from_dict(data: dict) -> Keyframe:
    kf = Keyframe(float(data["x_pos"]), float(data["y_pos"]), bool(data.get("follow_curve", False)))
    if data.get("uid"):
        kf.uid = str(data["uid"])
    return kf


def path_to_dict(path: Path) -> dict:
    return {
        "name": path.name,
        "uid": path.uid,
        "segments": [
            {
                "uid": seg.uid,
                "controls": [control_to_dict(cp) for cp in seg.controls],
                "speed_profiles": [keyframe_to_dict(kf) for kf in seg.speed_profiles],
            }
            for seg in path.segments
        ],
    }


def _same_knot(a: AnyControl, b: AnyControl) -> bool:
    if a.uid == b.uid:
        return True
    return same_position(a, b)


def path_from_dict(data: dict) -> Path:
    """Rebuild a path; each segment's first knot is re-linked to the previous segment's last knot."""
    segments: List[Segment] = []
    try:
        for seg_data in data.get("segments", []):
            controls = [control_from_dict(c) for c in seg_data["controls"]]
            if segments and controls and _same_knot(controls[0], segments[-1].last):
                controls[0] = segments[-1].last
            kfs = sorted((keyframe_from_dict(k) for k in seg_data.get("speed_profiles", [])),
                         key=lambda k: k.x_pos)
            segments.append(Segment(controls, kfs, uid=seg_data.get("uid")))
        return Path(segments, name=str(data.get("name", "Path")), uid=data.get("uid"))
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"malformed path document: {e!r}") from e


def save_path(filename: str, path: Path) -> None:
    parent = os.path.dirname(filename)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(path_to_dict(path), f, indent=4)


def load_path(filename: str) -> Path:
    with open(filename, "r", encoding="utf-8") as f:
        return path_from_dict(json.load(f))
