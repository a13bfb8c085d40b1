"""Moore codec.

A Moore curve of order ``n`` is four Hilbert curves of order ``n - 1``,
one per quadrant, rotated so the whole path is a closed loop: it starts
just left of the bottom centre, runs up the left half, across the top and
down the right half, and ends next to where it started.

Quadrants 0 and 1 hold the Hilbert sub-curve rotated a quarter turn
counter-clockwise, quadrants 2 and 3 rotated a quarter turn clockwise.
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
from .errors import check_order
from .hilbert import (
    QUADRANT_SIGNS,
    classify_quadrant,
    hilbert_coordinate,
    hilbert_index,
)

MAX_MOORE_ORDER = 16


def _rotate_out(quadrant: int, x: int, y: int) -> Coordinate:
    """Hilbert frame -> Moore quadrant frame."""
    if quadrant < 2:
        return (-y, x)
    return (y, -x)


def _rotate_in(quadrant: int, x: int, y: int) -> Coordinate:
    """Moore quadrant frame -> Hilbert frame; inverse of ``_rotate_out``."""
    if quadrant < 2:
        return (y, -x)
    return (-y, x)


def moore_index(coord: Coordinate, order: int) -> int:
    quadrant = classify_quadrant(coord)
    half = 1 << (order - 1)
    sx, sy = QUADRANT_SIGNS[quadrant]
    x, y = coord
    inner = _rotate_in(quadrant, x - sx * half, y - sy * half)
    return (quadrant << (2 * (order - 1))) + hilbert_index(inner, order - 1)


def moore_coordinate(index: int, order: int) -> Coordinate:
    shift = 2 * (order - 1)
    quadrant = (index >> shift) & 0x3
    x, y = hilbert_coordinate(index & ((1 << shift) - 1), order - 1)
    x, y = _rotate_out(quadrant, x, y)
    half = 1 << (order - 1)
    sx, sy = QUADRANT_SIGNS[quadrant]
    return (x + sx * half, y + sy * half)


class MooreCodec:
    # The last cell is grid-adjacent to the first.
    is_closed = True

    def __init__(self, order: int) -> None:
        self._order = check_order(order, maximum=MAX_MOORE_ORDER, what="moore")

    @property
    def order(self) -> int:
        return self._order

    def convert_coordinate_to_index(self, coord: Coordinate) -> int:
        """Index of a centered coordinate."""
        return moore_index(check_centered(coord, self._order), self._order)

    def convert_index_to_coordinate(self, index: int) -> Coordinate:
        """Centered coordinate of an index."""
        return moore_coordinate(check_index(index, self._order), self._order)

    coordinate_to_index = convert_coordinate_to_index
    index_to_coordinate = convert_index_to_coordinate

    def to_index(self, coord: Coordinate) -> int:
        return moore_index(to_centered(coord, self._order), self._order)

    def from_index(self, index: int) -> Coordinate:
        return to_zero_based(self.convert_index_to_coordinate(index), self._order)

    def coordinate_sequence(self) -> Iterator[Coordinate]:
        for i in range(cell_count(self._order)):
            yield self.from_index(i)

    def __repr__(self) -> str:
        return f"MooreCodec(order={self._order})"
