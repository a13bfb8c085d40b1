"""Space-filling curves: L-system instruction strings, coordinate codecs
and nearest-neighbour locality statistics."""

from .codec import Codec, CurveKind, make_codec
from .coords import Coordinate, to_centered, to_zero_based
from .curves import CurveInstructions, GrammarKind
from .errors import (
    ConfigError,
    EmptyAggregationError,
    InvalidOrderError,
    MalformedGrammarError,
    OutOfRangeError,
    SpaceFillError,
    UnclassifiableCoordinateError,
)
from .grammar import Grammar, expand, filter_for_drawing, stream_expand
from .hilbert import HilbertCodec
from .locality import (
    LocalityAnalyzer,
    StretchReport,
    average_stretch,
    mean,
    median,
    median_stretch,
    neighbors_of,
)
from .moore import MooreCodec
from .morton import MortonCodec, morton_decode, morton_encode

__all__ = [
    "Codec",
    "ConfigError",
    "Coordinate",
    "CurveInstructions",
    "CurveKind",
    "EmptyAggregationError",
    "Grammar",
    "GrammarKind",
    "HilbertCodec",
    "InvalidOrderError",
    "LocalityAnalyzer",
    "MalformedGrammarError",
    "MooreCodec",
    "MortonCodec",
    "OutOfRangeError",
    "SpaceFillError",
    "StretchReport",
    "UnclassifiableCoordinateError",
    "average_stretch",
    "expand",
    "filter_for_drawing",
    "make_codec",
    "mean",
    "median",
    "median_stretch",
    "morton_decode",
    "morton_encode",
    "neighbors_of",
    "stream_expand",
    "to_centered",
    "to_zero_based",
]
