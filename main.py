# main.py
"""Command line front end: calculate a path file and print, export or preview the points."""

import argparse
import logging
import sys

from pathcalc.config import codegen_flat, load_config, path_config_from
from pathcalc.path_export import (
    build_lemlib_lines, build_point_lines, export_lemlib_path, generate_path_asset_name
)
from pathcalc.pathing import calculate
from pathcalc.storage import load_path

APP_TITLE = "PATHCALC"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pathcalc", description="Uniform point and speed calculation for Bezier paths.")
    p.add_argument("path_file", help="path document (.json)")
    p.add_argument("-c", "--config", default=None, help="config document (default ./config.json)")
    p.add_argument("--export", action="store_true", help="write a LemLib v0.4 path file")
    p.add_argument("--points", action="store_true", help="print one line per point")
    p.add_argument("--preview", action="store_true", help="show the points in a pygame window")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def summary_lines(path, result):
    lines = [
        f"=== {APP_TITLE} ===",
        f"Path: {path.name}",
        f"Segments: {len(path.segments)}",
        f"Total travel distance: {result.ttd:.3f}",
        f"Points: {len(result.points)}",
    ]
    for i, rng in enumerate(result.segment_indexes):
        lines.append(f"  segment {i}: points [{rng.start}, {rng.end})")
    for kfi in result.keyframe_indexes:
        kf = kfi.keyframe
        lines.append(f"  keyframe @{kfi.index}: y={kf.y_pos:.2f}{' (follow curve)' if kf.follow_curve else ''}")
    return lines


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        cfg = load_config(args.config)
        pc = path_config_from(cfg)
        path = load_path(args.path_file)
    # Malformed documents surface as ValueError (JSON, config, segment and keyframe errors)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = calculate(path, pc)
    for line in summary_lines(path, result):
        print(line)

    if args.points:
        fmt = codegen_flat(cfg).get("point_columns", "{X}, {Y}, {SPEED}")
        for line in build_point_lines(result, pc, str(fmt)):
            print(line)

    if args.export:
        try:
            export_lemlib_path(build_lemlib_lines(path, result, pc), generate_path_asset_name(path.name), cfg)
        except OSError as e:
            print(f"Failed to export path: {e}", file=sys.stderr)
            return 1

    if args.preview:
        from pathcalc.draw import preview
        preview(path, result, pc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
