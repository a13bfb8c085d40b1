"""Morton (Z-order) codec.

Bits of x go to the even positions of the index and bits of y to the odd
positions, using the "interleave by binary magic numbers" technique from
Bit Twiddling Hacks. The combined index is 32 bits wide, 16 per axis.
"""

from __future__ import annotations

from collections.abc import Iterator

from .coords import Coordinate, cell_count, check_index, check_zero_based
from .errors import OutOfRangeError, _require, check_order

MAX_MORTON_ORDER = 16

_MASKS = (0x55555555, 0x33333333, 0x0F0F0F0F, 0x00FF00FF)
_SHIFTS = (1, 2, 4, 8)
_AXIS_LIMIT = 1 << MAX_MORTON_ORDER
_INDEX_LIMIT = 1 << (2 * MAX_MORTON_ORDER)


def _spread(v: int) -> int:
    for shift, mask in zip(reversed(_SHIFTS), reversed(_MASKS)):
        v = (v | (v << shift)) & mask
    return v


def _compact(v: int) -> int:
    v &= _MASKS[0]
    for shift, mask in zip(_SHIFTS, _MASKS[1:] + (0x0000FFFF,)):
        v = (v | (v >> shift)) & mask
    return v


def morton_encode(x: int, y: int) -> int:
    _require(
        0 <= x < _AXIS_LIMIT and 0 <= y < _AXIS_LIMIT,
        f"Morton coordinates must be in [0, {_AXIS_LIMIT - 1}], got ({x}, {y})",
        OutOfRangeError,
    )
    return _spread(x) | (_spread(y) << 1)


def morton_decode(index: int) -> Coordinate:
    _require(
        0 <= index < _INDEX_LIMIT,
        f"Morton index must be in [0, {_INDEX_LIMIT - 1}], got {index}",
        OutOfRangeError,
    )
    return (_compact(index), _compact(index >> 1))


class MortonCodec:
    """Z-order traversal of a ``2**order`` square grid (zero-based coordinates)."""

    is_closed = False

    def __init__(self, order: int) -> None:
        self._order = check_order(order, maximum=MAX_MORTON_ORDER, what="morton")

    @property
    def order(self) -> int:
        return self._order

    def to_index(self, coord: Coordinate) -> int:
        x, y = check_zero_based(coord, self._order)
        return morton_encode(x, y)

    def from_index(self, index: int) -> Coordinate:
        return morton_decode(check_index(index, self._order))

    def coordinate_sequence(self) -> Iterator[Coordinate]:
        for i in range(cell_count(self._order)):
            yield morton_decode(i)

    def __repr__(self) -> str:
        return f"MortonCodec(order={self._order})"
