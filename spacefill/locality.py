"""Nearest-neighbour stretch: how far apart grid neighbours land on a curve.

For every cell of a ``2**order`` grid, the stretch to each of its
Chebyshev (king-move) neighbours is the absolute difference of their curve
indices. Per-cell stretches are aggregated by mean or median, and the
per-cell values are aggregated again, with the same statistic, over the
whole grid.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import cached_property

from .codec import Codec, CurveKind, make_codec
from .coords import (
    Coordinate,
    cell_count,
    check_zero_based,
    grid_coordinates,
    max_coordinate,
    side_length,
)
from .errors import (
    ConfigError,
    EmptyAggregationError,
    OutOfRangeError,
    _require,
    check_order,
)

MAX_ANALYSIS_ORDER = 10

# -------------------------
# Statistics
# -------------------------


def mean(values: Sequence[float]) -> float:
    _require(len(values) > 0, "cannot average an empty list", EmptyAggregationError)
    return math.fsum(values) / len(values)


def median(values: Sequence[float]) -> float:
    _require(
        len(values) > 0, "cannot take the median of an empty list", EmptyAggregationError
    )
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return float(ordered[mid])


STATISTICS: dict[str, Callable[[Sequence[float]], float]] = {
    "average": mean,
    "median": median,
}


# -------------------------
# Neighbours
# -------------------------


def neighbors_of(coord: Coordinate, max_coord: int) -> list[Coordinate]:
    """In-bounds cells at Chebyshev distance 1 of a zero-based ``coord``."""
    x, y = coord
    _require(
        0 <= x <= max_coord and 0 <= y <= max_coord,
        f"coordinate {coord} outside [0, {max_coord}]",
        OutOfRangeError,
    )
    out: list[Coordinate] = []
    if x > 0 and y > 0:
        out.append((x - 1, y - 1))
    if x > 0:
        out.append((x - 1, y))
    if y > 0:
        out.append((x, y - 1))
    if x < max_coord and y > 0:
        out.append((x + 1, y - 1))
    if x < max_coord:
        out.append((x + 1, y))
    if x > 0 and y < max_coord:
        out.append((x - 1, y + 1))
    if y < max_coord:
        out.append((x, y + 1))
    if x < max_coord and y < max_coord:
        out.append((x + 1, y + 1))
    return out


def neighbor_map(order: int) -> dict[Coordinate, list[Coordinate]]:
    top = max_coordinate(order)
    return {c: neighbors_of(c, top) for c in grid_coordinates(order)}


# -------------------------
# Analyzer
# -------------------------


@dataclass(frozen=True)
class StretchReport:
    curve: str
    order: int
    average: float
    median: float
    wraparound: bool = False


class LocalityAnalyzer:
    """Stretch statistics for one curve at one order.

    With ``wraparound`` set, index distances on a closed curve (Moore) are
    measured the short way round the loop, ``min(d, 4**order - d)``.
    Without it every curve uses plain ``|i - j|``.
    """

    def __init__(
        self, kind: CurveKind | str, order: int, *, wraparound: bool = False
    ) -> None:
        if isinstance(kind, str):
            kind = CurveKind.parse(kind)
        check_order(order, maximum=MAX_ANALYSIS_ORDER, what="analysis")
        self._kind = kind
        self._codec: Codec = make_codec(kind, order)
        _require(
            not wraparound or self._codec.is_closed,
            f"wraparound only applies to closed curves, not {kind.value}",
        )
        self._wraparound = wraparound

    @property
    def kind(self) -> CurveKind:
        return self._kind

    @property
    def order(self) -> int:
        return self._codec.order

    @property
    def codec(self) -> Codec:
        return self._codec

    @cached_property
    def index_grid(self) -> list[list[int]]:
        """``index_grid[x][y]`` is the curve index of zero-based cell (x, y)."""
        side = side_length(self.order)
        to_index = self._codec.to_index
        return [[to_index((x, y)) for y in range(side)] for x in range(side)]

    @cached_property
    def neighbors(self) -> dict[Coordinate, list[Coordinate]]:
        return neighbor_map(self.order)

    def index_distance(self, a: int, b: int) -> int:
        d = abs(a - b)
        if self._wraparound:
            d = min(d, cell_count(self.order) - d)
        return d

    def neighbor_stretches(self, coord: Coordinate) -> list[int]:
        x, y = check_zero_based(coord, self.order)
        grid = self.index_grid
        here = grid[x][y]
        return [
            self.index_distance(here, grid[nx][ny])
            for nx, ny in self.neighbors[(x, y)]
        ]

    def per_cell(self, statistic: str) -> list[float]:
        agg = _statistic(statistic)
        return [agg(self.neighbor_stretches(c)) for c in grid_coordinates(self.order)]

    def stretch(self, statistic: str) -> float:
        return _statistic(statistic)(self.per_cell(statistic))

    def average_stretch(self) -> float:
        return self.stretch("average")

    def median_stretch(self) -> float:
        return self.stretch("median")

    def report(self) -> StretchReport:
        return StretchReport(
            curve=self._kind.value,
            order=self.order,
            average=self.average_stretch(),
            median=self.median_stretch(),
            wraparound=self._wraparound,
        )


def _statistic(name: str) -> Callable[[Sequence[float]], float]:
    try:
        return STATISTICS[name]
    except KeyError:
        choices = ", ".join(STATISTICS)
        raise ConfigError(
            f"unknown statistic {name!r} (expected one of: {choices})"
        ) from None


def average_stretch(
    kind: CurveKind | str, order: int, *, wraparound: bool = False
) -> float:
    return LocalityAnalyzer(kind, order, wraparound=wraparound).average_stretch()


def median_stretch(
    kind: CurveKind | str, order: int, *, wraparound: bool = False
) -> float:
    return LocalityAnalyzer(kind, order, wraparound=wraparound).median_stretch()
