# pathcalc/draw.py
"""pygame preview of a calculated path."""

from __future__ import annotations

import math
from typing import Callable, Tuple

import pygame

from .config import PathConfig
from .geom import heading_of, heading_to_angle
from .path_model import Path, PointCalculationResult

BG_COLOR = (30, 30, 30)
GRID_COLOR = (50, 50, 50)
KNOT_COLOR = (50, 255, 50)
ARROW_COLOR = (255, 255, 255)
SLOW_COLOR = (255, 0, 0)
FAST_COLOR = (100, 180, 255)
MARGIN_PX = 24

Transform = Callable[[float, float], Tuple[int, int]]


def fit_transform(path: Path, result: PointCalculationResult, size: Tuple[int, int],
                  margin: int = MARGIN_PX) -> Transform:
    """World (y up) to screen (y down) mapping that fits the path into size."""
    xs = [p.x for p in result.points] + [cp.x for cp in path.controls]
    ys = [p.y for p in result.points] + [cp.y for cp in path.controls]
    if not xs:
        xs, ys = [0.0], [0.0]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    w, h = size
    span = max(max_x - min_x, max_y - min_y, 1e-9)
    scale = min(w - 2 * margin, h - 2 * margin) / span

    def to_screen(x: float, y: float) -> Tuple[int, int]:
        sx = margin + (x - min_x) * scale
        sy = h - margin - (y - min_y) * scale
        return int(round(sx)), int(round(sy))

    return to_screen


def speed_color(speed: float, pc: PathConfig) -> Tuple[int, int, int]:
    """Blend from SLOW_COLOR at speed_limit.start to FAST_COLOR at speed_limit.end."""
    span = pc.speed_limit.span
    k = 0.0 if span == 0 else (speed - pc.speed_limit.start) / span
    k = max(0.0, min(1.0, k))
    return tuple(int(round(a + (b - a) * k)) for a, b in zip(SLOW_COLOR, FAST_COLOR))  # type: ignore[return-value]


def draw_grid(surface, grid_size_px: int):
    """Draw field grid lines."""
    w, h = surface.get_width(), surface.get_height()
    for x in range(0, w, int(grid_size_px)):
        pygame.draw.line(surface, GRID_COLOR, (x, 0), (x, h))
    for y in range(0, h, int(grid_size_px)):
        pygame.draw.line(surface, GRID_COLOR, (0, y), (w, y))


def draw_chevron(surface, pos, heading_deg: float, length: int = 14):
    """Heading tick from pos; heading 0 points up the screen, clockwise positive."""
    angle = heading_to_angle(heading_deg)
    end = (pos[0] + length * math.cos(angle), pos[1] - length * math.sin(angle))
    pygame.draw.line(surface, ARROW_COLOR, pos, end, 2)


def draw_points(surface, result: PointCalculationResult, pc: PathConfig, to_screen: Transform, radius: int = 2):
    for p in result.points:
        pygame.draw.circle(surface, speed_color(p.speed, pc), to_screen(p.x, p.y), radius)


def draw_knots(surface, path: Path, to_screen: Transform, radius: int = 5):
    """Controls of visible segments; knots get a heading chevron."""
    for i, segment in enumerate(path.segments):
        if not segment.is_visible():
            continue
        # shared knot already drawn with a visible previous segment
        shared = i > 0 and path.segments[i - 1].is_visible()
        controls = segment.controls[1:] if shared else segment.controls
        for cp in controls:
            pos = to_screen(cp.x, cp.y)
            heading = heading_of(cp)
            if heading is not None:
                pygame.draw.circle(surface, KNOT_COLOR, pos, radius)
                draw_chevron(surface, pos, heading)
            else:
                pygame.draw.circle(surface, GRID_COLOR, pos, radius - 2)


def render_result(surface, path: Path, result: PointCalculationResult, pc: PathConfig, grid_size_px: int = 50):
    """Draw the whole preview onto surface (no display needed)."""
    surface.fill(BG_COLOR)
    draw_grid(surface, grid_size_px)
    to_screen = fit_transform(path, result, surface.get_size())
    draw_points(surface, result, pc, to_screen)
    draw_knots(surface, path, to_screen)
    return to_screen


def preview(path: Path, result: PointCalculationResult, pc: PathConfig, size=(600, 600)):
    """Open a window with the preview until it is closed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(f"{path.name}: {len(result.points)} points, ttd {result.ttd:.2f}")
        clock = pygame.time.Clock()
        render_result(screen, path, result, pc)
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                    running = False
            pygame.display.flip()
            clock.tick(30)
    finally:
        pygame.quit()
