"""Uniform point and speed calculation for Bezier robot paths."""

from .pathing import calculate

__all__ = ["calculate"]
