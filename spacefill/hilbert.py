"""Hilbert codec by recursive quadrant decomposition.

Works on centered coordinates (see ``coords``). The plane is split into
four quadrants by sign, numbered in visit order::

    1 | 2
    --+--
    0 | 3

At order 1 the quadrant number is the index, so the canonical order-1
curve is ``(-1,-1) -> (-1,1) -> (1,1) -> (1,-1)``. At higher orders
quadrants 1 and 2 hold a translated copy of the order ``n-1`` curve,
quadrant 0 a transposed copy and quadrant 3 an anti-transposed copy, which
makes each sub-curve enter next to where the previous one left.

Two distinct constants are involved at each level: the quadrant occupies
index bits ``2*(order-1)`` and up, and its centre sits ``2**(order-1)``
away from the origin on each axis.
"""

from __future__ import annotations

from collections.abc import Iterator

from .coords import (
    Coordinate,
    cell_count,
    check_centered,
    check_index,
    to_centered,
    to_zero_based,
)
from .errors import UnclassifiableCoordinateError, check_order

MAX_HILBERT_ORDER = 16

_BASE_POSITIONS: tuple[Coordinate, ...] = ((-1, -1), (-1, 1), (1, 1), (1, -1))

# Sign of the quadrant centre on each axis.
QUADRANT_SIGNS: tuple[Coordinate, ...] = ((-1, -1), (-1, 1), (1, 1), (1, -1))


def classify_quadrant(coord: Coordinate) -> int:
    x, y = coord
    if x < 0 and y < 0:
        return 0
    if x < 0 and y > 0:
        return 1
    if x > 0 and y > 0:
        return 2
    if x > 0 and y < 0:
        return 3
    raise UnclassifiableCoordinateError(
        f"coordinate {coord} lies on an axis and has no quadrant"
    )


def _orient(quadrant: int, x: int, y: int) -> Coordinate:
    # Both reflections are involutions, so this maps in either direction.
    if quadrant == 0:
        return (y, x)
    if quadrant == 3:
        return (-y, -x)
    return (x, y)


def hilbert_index(coord: Coordinate, order: int) -> int:
    """Index of a centered coordinate along the order-``order`` Hilbert curve.

    Order 0 is the single cell ``(0, 0)``; it is used by the Moore codec,
    whose quadrants hold curves one order lower than the grid.
    """
    if order == 0:
        if coord != (0, 0):
            raise UnclassifiableCoordinateError(
                f"order-0 curve has only the cell (0, 0), got {coord}"
            )
        return 0

    quadrant = classify_quadrant(coord)
    if order == 1:
        return quadrant

    half = 1 << (order - 1)
    sx, sy = QUADRANT_SIGNS[quadrant]
    x, y = coord
    inner = _orient(quadrant, x - sx * half, y - sy * half)
    return (quadrant << (2 * (order - 1))) + hilbert_index(inner, order - 1)


def hilbert_coordinate(index: int, order: int) -> Coordinate:
    """Centered coordinate of ``index`` along the order-``order`` Hilbert curve."""
    if order == 0:
        return (0, 0)
    if order == 1:
        return _BASE_POSITIONS[index]

    shift = 2 * (order - 1)
    quadrant = (index >> shift) & 0x3
    x, y = hilbert_coordinate(index & ((1 << shift) - 1), order - 1)
    x, y = _orient(quadrant, x, y)
    half = 1 << (order - 1)
    sx, sy = QUADRANT_SIGNS[quadrant]
    return (x + sx * half, y + sy * half)


class HilbertCodec:
    is_closed = False

    def __init__(self, order: int) -> None:
        self._order = check_order(order, maximum=MAX_HILBERT_ORDER, what="hilbert")

    @property
    def order(self) -> int:
        return self._order

    def coordinate_to_index(self, coord: Coordinate) -> int:
        """Index of a centered coordinate."""
        return hilbert_index(check_centered(coord, self._order), self._order)

    def index_to_coordinate(self, index: int) -> Coordinate:
        """Centered coordinate of an index."""
        return hilbert_coordinate(check_index(index, self._order), self._order)

    def to_index(self, coord: Coordinate) -> int:
        """Index of a zero-based coordinate."""
        return hilbert_index(to_centered(coord, self._order), self._order)

    def from_index(self, index: int) -> Coordinate:
        """Zero-based coordinate of an index."""
        return to_zero_based(self.index_to_coordinate(index), self._order)

    def coordinate_sequence(self) -> Iterator[Coordinate]:
        for i in range(cell_count(self._order)):
            yield self.from_index(i)

    def __repr__(self) -> str:
        return f"HilbertCodec(order={self._order})"
