"""Geometry projector for the city map.

Simulation coordinates live in ``[0, grid_size]`` on both axes; the map is
drawn in a fixed square pixel viewport with a uniform padding.  The same
projection is used for neighborhoods, hospitals and gridline ticks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

VIEWPORT_SIZE = 520.0
VIEWPORT_PADDING = 24.0
MAX_GRID_STEPS = 12


@dataclass(frozen=True)
class GridLine:
    """One reference gridline: its index, pixel position and km label."""

    id: int
    position: float
    label: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def project(
    value: float,
    axis_extent: float,
    viewport_size: float = VIEWPORT_SIZE,
    padding: float = VIEWPORT_PADDING,
) -> float:
    """Map *value* in ``[0, axis_extent]`` to a pixel coordinate.

    The denominator is floored at 1 so an extent of 0 does not divide by
    zero.
    """
    plot_size = viewport_size - 2 * padding
    return padding + (value / max(axis_extent, 1)) * plot_size


def grid_lines(
    axis_extent: float,
    viewport_size: float = VIEWPORT_SIZE,
    padding: float = VIEWPORT_PADDING,
) -> list[GridLine]:
    """Evenly spaced ticks across the viewport, ``min(extent, 12)`` steps.

    Each line is labeled with the rounded real-world value it marks.
    """
    steps = max(int(min(axis_extent, MAX_GRID_STEPS)), 1)
    plot_size = viewport_size - 2 * padding
    lines: list[GridLine] = []
    for idx in range(steps + 1):
        ratio = idx / steps
        lines.append(
            GridLine(
                id=idx,
                position=padding + ratio * plot_size,
                label=round_half_up(ratio * axis_extent),
            )
        )
    return lines
