"""Error types and validation helpers shared across spacefill."""

from __future__ import annotations

from typing import Any, cast


class SpaceFillError(ValueError):
    pass


class ConfigError(SpaceFillError):
    pass


class InvalidOrderError(SpaceFillError):
    pass


class UnclassifiableCoordinateError(SpaceFillError):
    pass


class OutOfRangeError(SpaceFillError):
    pass


class MalformedGrammarError(SpaceFillError):
    pass


class EmptyAggregationError(SpaceFillError):
    pass


def _require(
    cond: bool, msg: str, error: type[SpaceFillError] = ConfigError
) -> None:
    if not cond:
        raise error(msg)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_bool(x: Any, path: str) -> bool:
    _require(isinstance(x, bool), f"{path} must be a boolean")
    return cast(bool, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


def _as_list(x: Any, path: str) -> list[Any]:
    _require(isinstance(x, list), f"{path} must be a list")
    return cast(list[Any], x)


def check_order(order: Any, *, maximum: int, what: str) -> int:
    """Validate a curve order, raising InvalidOrderError instead of clamping."""
    _require(
        isinstance(order, int) and not isinstance(order, bool),
        f"{what} order must be an integer, got {order!r}",
        InvalidOrderError,
    )
    _require(order >= 1, f"{what} order must be >= 1, got {order}", InvalidOrderError)
    _require(
        order <= maximum,
        f"{what} order must be <= {maximum}, got {order}",
        InvalidOrderError,
    )
    return int(order)
