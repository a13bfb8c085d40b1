"""Turtle interpretation of drawing instructions as a path of points.

This is the contract a renderer relies on: forward symbols advance one
step along the heading, ``+`` turns left and ``-`` turns right by the
curve's turn angle. The result is plain data; stroking it is left to the
caller.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import ConfigError, _require

Point = tuple[float, float]

# Unit vectors for headings 0, 90, 180, 270 degrees.
_RIGHT_ANGLE_STEPS = ((1, 0), (0, 1), (-1, 0), (0, -1))


@dataclass(frozen=True)
class TurtleState:
    x: float
    y: float
    heading_deg: float


def trace(
    symbols: Iterable[str],
    *,
    angle_deg: float,
    forward: Iterable[str],
    start: TurtleState = TurtleState(0, 0, 90),
    step: float = 1,
    precision: int = 9,
) -> list[Point]:
    """Walk ``symbols`` and return every visited point, start included.

    When the turn angle and starting heading are multiples of 90 degrees
    the walk is done on the integer lattice and the points are exact ints;
    otherwise points are rounded to ``precision`` decimal places.
    """
    _require(step > 0, "step must be > 0")
    forward_set = frozenset(forward)

    if angle_deg % 90 == 0 and start.heading_deg % 90 == 0:
        return _trace_lattice(symbols, angle_deg, forward_set, start, step)

    x, y, h = float(start.x), float(start.y), float(start.heading_deg)
    points: list[Point] = [(x, y)]
    for sym in symbols:
        if sym in forward_set:
            rad = math.radians(h)
            x += step * math.cos(rad)
            y += step * math.sin(rad)
            points.append((round(x, precision) + 0.0, round(y, precision) + 0.0))
        elif sym == "+":
            h += angle_deg
        elif sym == "-":
            h -= angle_deg
        else:
            raise ConfigError(f"Unknown drawing symbol {sym!r}")
    return points


def _trace_lattice(
    symbols: Iterable[str],
    angle_deg: float,
    forward: frozenset[str],
    start: TurtleState,
    step: float,
) -> list[Point]:
    quarter_turns = int(angle_deg // 90)
    heading = int(start.heading_deg // 90) % 4
    x, y = start.x, start.y
    points: list[Point] = [(x, y)]
    for sym in symbols:
        if sym in forward:
            dx, dy = _RIGHT_ANGLE_STEPS[heading]
            x += dx * step
            y += dy * step
            points.append((x, y))
        elif sym == "+":
            heading = (heading + quarter_turns) % 4
        elif sym == "-":
            heading = (heading - quarter_turns) % 4
        else:
            raise ConfigError(f"Unknown drawing symbol {sym!r}")
    return points


def path_bounds(points: list[Point]) -> tuple[float, float, float, float]:
    _require(len(points) > 0, "No drawable geometry produced.")
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (min(xs), min(ys), max(xs), max(ys))
