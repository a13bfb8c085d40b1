"""Grid coordinate conventions.

Two conventions coexist:

* zero-based: ``0 <= x, y <= 2**order - 1``; used for grid enumeration,
  the Morton codec and the uniform codec interface.
* centered: odd integers symmetric about the origin with spacing 2, so an
  order-2 grid spans ``-3, -1, 1, 3`` on each axis; used by the Hilbert and
  Moore quadrant recursion.

The map between them is ``centered = 2 * zero_based - (2**order - 1)``.
"""

from __future__ import annotations

from collections.abc import Iterator

from .errors import OutOfRangeError, UnclassifiableCoordinateError, _require

Coordinate = tuple[int, int]


def side_length(order: int) -> int:
    return 1 << order


def cell_count(order: int) -> int:
    return 1 << (2 * order)


def max_coordinate(order: int) -> int:
    return (1 << order) - 1


def check_zero_based(coord: Coordinate, order: int) -> Coordinate:
    x, y = coord
    top = max_coordinate(order)
    _require(
        0 <= x <= top and 0 <= y <= top,
        f"coordinate {coord} outside the {top + 1}x{top + 1} grid",
        OutOfRangeError,
    )
    return (x, y)


def check_centered(coord: Coordinate, order: int) -> Coordinate:
    x, y = coord
    _require(
        x % 2 == 1 and y % 2 == 1,
        f"centered coordinate {coord} must have odd, non-zero components",
        UnclassifiableCoordinateError,
    )
    top = max_coordinate(order)
    _require(
        -top <= x <= top and -top <= y <= top,
        f"centered coordinate {coord} outside [-{top}, {top}]",
        OutOfRangeError,
    )
    return (x, y)


def check_index(index: int, order: int) -> int:
    _require(
        0 <= index < cell_count(order),
        f"index {index} outside [0, {cell_count(order) - 1}]",
        OutOfRangeError,
    )
    return index


def to_centered(coord: Coordinate, order: int) -> Coordinate:
    x, y = check_zero_based(coord, order)
    top = max_coordinate(order)
    return (2 * x - top, 2 * y - top)


def to_zero_based(coord: Coordinate, order: int) -> Coordinate:
    x, y = check_centered(coord, order)
    top = max_coordinate(order)
    return ((x + top) // 2, (y + top) // 2)


def grid_coordinates(order: int) -> Iterator[Coordinate]:
    """Every zero-based cell, column by column."""
    top = max_coordinate(order)
    for x in range(top + 1):
        for y in range(top + 1):
            yield (x, y)
