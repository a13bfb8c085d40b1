"""Uniform access to the coordinate codecs.

Every codec maps zero-based grid coordinates to curve indices and back;
``CurveKind`` picks the implementation once, at construction.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from typing import Protocol, cast

from .coords import Coordinate
from .errors import ConfigError
from .hilbert import HilbertCodec
from .moore import MooreCodec
from .morton import MortonCodec


class Codec(Protocol):
    is_closed: bool

    @property
    def order(self) -> int: ...

    def to_index(self, coord: Coordinate) -> int: ...

    def from_index(self, index: int) -> Coordinate: ...

    def coordinate_sequence(self) -> Iterator[Coordinate]: ...


class CurveKind(enum.Enum):
    HILBERT = "hilbert"
    MOORE = "moore"
    MORTON = "morton"

    @classmethod
    def parse(cls, name: str) -> CurveKind:
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(k.value for k in cls)
            raise ConfigError(
                f"unknown codec curve {name!r} (expected one of: {choices})"
            ) from None

    @property
    def is_closed(self) -> bool:
        return _CODECS[self].is_closed

    def codec(self, order: int) -> Codec:
        return _CODECS[self](order)


_CODECS: dict[CurveKind, type[HilbertCodec | MooreCodec | MortonCodec]] = {
    CurveKind.HILBERT: HilbertCodec,
    CurveKind.MOORE: MooreCodec,
    CurveKind.MORTON: MortonCodec,
}


def make_codec(kind: CurveKind | str, order: int) -> Codec:
    if isinstance(kind, str):
        kind = CurveKind.parse(kind)
    return kind.codec(order)


class CenteredCodec(Codec, Protocol):
    def coordinate_to_index(self, coord: Coordinate) -> int: ...

    def index_to_coordinate(self, index: int) -> Coordinate: ...


def make_centered_codec(kind: CurveKind | str, order: int) -> CenteredCodec:
    """A codec that also accepts centered coordinates (hilbert, moore)."""
    if isinstance(kind, str):
        kind = CurveKind.parse(kind)
    if kind is CurveKind.MORTON:
        raise ConfigError("morton has no centered coordinate convention")
    return cast(CenteredCodec, kind.codec(order))
