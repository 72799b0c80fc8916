# pathcalc/path_export.py
"""
Path file export for LemLib/JerryIO-style integration.
Turns a calculated point list into the .txt path files read by LemLib's
pure pursuit (v0.4 format), or into plain per-point lines.
"""

from __future__ import annotations

import os
from typing import List

from .config import PathConfig, codegen_flat
from .geom import Vector
from .path_model import Path, PointCalculationResult, Segment
from .units import UnitConverter, UnitOfLength

# LemLib Path-Gen places the stopping "ghost" point this far past the end
GHOST_POINT_DISTANCE_IN = 20.0
DEFAULT_POINT_COLUMNS = "{X}, {Y}, {SPEED}"


def _cubic_controls(segment: Segment) -> List[Vector]:
    """Four control points describing the segment as a cubic curve."""
    c = segment.controls
    if segment.is_linear():
        center = c[0].lerp(c[1], 0.5)
        return [c[0], center, center, c[1]]
    if segment.degree == 2:
        # Exact degree elevation
        c1 = c[0].lerp(c[1], 2.0 / 3.0)
        c2 = c[2].lerp(c[1], 2.0 / 3.0)
        return [c[0], c1, c2, c[2]]
    # Cubic is exact; higher degrees keep their end tangents only
    return [c[0], c[1], c[-2], c[-1]]


def build_lemlib_lines(path: Path, result: PointCalculationResult, pc: PathConfig) -> List[str]:
    """
    LemLib v0.4 path file body.

    Format:
    - one "x, y, speed" line per point, in inches
    - a ghost point 20 inches past the end with speed 0
    - "endData", 200, max speed, 200
    - one line of four control points per segment
    """
    uc = UnitConverter(pc.unit, UnitOfLength.INCH)
    lines = []
    for p in result.points:
        lines.append(f"{uc.from_a_to_b(p.x):.3f}, {uc.from_a_to_b(p.y):.3f}, {p.speed:.3f}")

    if len(result.points) > 1:
        last2 = Vector(result.points[-2].x, result.points[-2].y)
        last1 = Vector(result.points[-1].x, result.points[-1].y)
        ghost = last2.interpolate(last1, last2.distance(last1) + uc.from_b_to_a(GHOST_POINT_DISTANCE_IN))
        lines.append(f"{uc.from_a_to_b(ghost.x):.3f}, {uc.from_a_to_b(ghost.y):.3f}, 0")

    lines.append("endData")
    lines.append("200")  # not supported
    lines.append(f"{pc.speed_limit.end:g}")
    lines.append("200")  # not supported

    for segment in path.segments:
        ctrl = _cubic_controls(segment)
        lines.append(", ".join(f"{uc.from_a_to_b(v.x):.3f}, {uc.from_a_to_b(v.y):.3f}" for v in ctrl))
    return lines


def _point_format(fmt: str) -> str:
    """fmt if it formats a point with the known tokens, else DEFAULT_POINT_COLUMNS."""
    if "{X" not in fmt or "{Y" not in fmt:
        return DEFAULT_POINT_COLUMNS
    try:
        fmt.format(X=0.0, Y=0.0, SPEED=0.0, HEADING=0.0)
    except (KeyError, IndexError, ValueError):
        return DEFAULT_POINT_COLUMNS
    return fmt


def build_point_lines(result: PointCalculationResult, pc: PathConfig, fmt: str = DEFAULT_POINT_COLUMNS,
                      unit: UnitOfLength = UnitOfLength.INCH) -> List[str]:
    """One formatted line per point; tokens: X, Y, SPEED, HEADING (0 when unset)."""
    fmt = _point_format(fmt)
    uc = UnitConverter(pc.unit, unit)
    lines = []
    for p in result.points:
        tokens = {
            "X": uc.from_a_to_b(p.x),
            "Y": uc.from_a_to_b(p.y),
            "SPEED": p.speed,
            "HEADING": p.heading if p.heading is not None else 0.0,
        }
        lines.append(fmt.format(**tokens))
    return lines


def generate_path_asset_name(path_name: str) -> str:
    """Sanitized filename like "autonomous_path.txt"."""
    safe_name = "".join(c if c.isalnum() else "_" for c in path_name)
    return f"{safe_name}_path.txt"


def export_lemlib_path(lines: List[str], filename: str, cfg: dict) -> str:
    """
    Write path lines into the configured export directory.

    Relative codegen.path_dir values are resolved against the working directory.
    Returns the full path of the written file.
    """
    export_dir = codegen_flat(cfg).get("path_dir", "export/paths")
    export_dir = os.path.expanduser(str(export_dir or "export/paths"))
    if not os.path.isabs(export_dir):
        export_dir = os.path.join(os.getcwd(), export_dir)
    os.makedirs(export_dir, exist_ok=True)

    filepath = os.path.join(export_dir, filename)
    with open(filepath, "w") as f:
        f.write("\n".join(lines) + "\n")

    print(f"Exported path to: {filepath}")
    return filepath
