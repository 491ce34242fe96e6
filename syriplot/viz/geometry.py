"""Curve and circular-layout geometry shared by the renderers."""

from __future__ import annotations

from typing import Dict, Tuple

import numpy as np

from syriplot.registry import ChromosomeRegistry

GAP_DEGREES = 3.0
START_DEGREES = 0.0  # clockwise from 12 o'clock


def quadratic_bezier(p0, p1, p2, n: int = 50) -> np.ndarray:
    """Sample a quadratic Bezier curve; returns an ``(n, 2)`` array."""
    t = np.linspace(0.0, 1.0, n)[:, None]
    p0, p1, p2 = (np.asarray(p, dtype=float) for p in (p0, p1, p2))
    return (1 - t) ** 2 * p0 + 2 * (1 - t) * t * p1 + t ** 2 * p2


def curve_points(
    x0: float, y0: float, x1: float, y1: float,
    curvature: float = 0.2, n: int = 50,
    x_scale: float = 1.0, y_scale: float = 1.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """Points of a curved connector between ``(x0, y0)`` and ``(x1, y1)``.

    The control point sits off the chord midpoint by ``curvature`` times
    the chord length, measured in coordinates divided by *x_scale* and
    *y_scale* so the bend looks the same whatever the axis units.
    """
    a = np.array([x0 / x_scale, y0 / y_scale])
    b = np.array([x1 / x_scale, y1 / y_scale])
    chord = b - a
    normal = np.array([-chord[1], chord[0]])
    control = (a + b) / 2 + curvature * normal
    pts = quadratic_bezier(a, control, b, n=n)
    return pts[:, 0] * x_scale, pts[:, 1] * y_scale


class SectorLayout:
    """Angular placement of chromosomes around a circle.

    Sectors follow registry order clockwise from *start_degrees* (0 is the
    top of the circle) with *gap_degrees* after each sector. Angles
    returned by :meth:`angle` are in radians, counter-clockwise from the
    positive x axis, ready for ``cos``/``sin``.
    """

    def __init__(
        self, registry: ChromosomeRegistry,
        gap_degrees: float = GAP_DEGREES, start_degrees: float = START_DEGREES,
    ):
        n = len(registry)
        available = 360.0 - gap_degrees * n
        if available <= 0:
            raise ValueError("gap_degrees too large for the number of chromosomes")
        self.gap_degrees = gap_degrees
        self.start_degrees = start_degrees
        self.spans: Dict[str, Tuple[float, float]] = {}
        self.lengths: Dict[str, float] = {}

        total = registry.total_length
        cursor = start_degrees
        for entry in registry:
            width = available * entry.length / total
            self.spans[entry.name] = (cursor, cursor + width)
            self.lengths[entry.name] = entry.length
            cursor += width + gap_degrees

    def clock_degrees(self, name: str, position: float) -> float:
        lo, hi = self.spans[name]
        return lo + (hi - lo) * position / self.lengths[name]

    def angle(self, name: str, position):
        """Math-convention angle (radians) of *position* on chromosome *name*."""
        return np.deg2rad(90.0 - self.clock_degrees(name, position))

    def arc(self, name: str, start: float, end: float, radius: float, n: int = 30) -> np.ndarray:
        """``(n, 2)`` points along the circle between two positions."""
        theta = self.angle(name, np.linspace(start, end, n))
        return np.column_stack([radius * np.cos(theta), radius * np.sin(theta)])

    def ribbon(
        self, name_a: str, start_a: float, end_a: float,
        name_b: str, start_b: float, end_b: float,
        radius: float = 1.0, height_ratio: float = 0.5, n: int = 30,
    ) -> np.ndarray:
        """Closed polygon linking two arcs through the circle interior.

        *height_ratio* pulls the connecting curves toward the centre: 1
        passes through the origin, 0 hugs the chord.
        """
        arc_a = self.arc(name_a, start_a, end_a, radius, n)
        arc_b = self.arc(name_b, start_b, end_b, radius, n)
        pull = 1.0 - height_ratio
        to_b = quadratic_bezier(arc_a[-1], pull * (arc_a[-1] + arc_b[0]) / 2, arc_b[0], n)
        to_a = quadratic_bezier(arc_b[-1], pull * (arc_b[-1] + arc_a[0]) / 2, arc_a[0], n)
        return np.vstack([arc_a, to_b, arc_b, to_a])
