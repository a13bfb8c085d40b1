"""Locality studies: stretch statistics over several curves and orders.

A study is described by a JSON config, parsed into a ``StudyConfig``, and
run one task per (curve, order). Tasks are independent, so with
``jobs > 1`` they are spread over a process pool.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, cast

from .codec import CurveKind
from .errors import (
    ConfigError,
    _as_bool,
    _as_dict,
    _as_int,
    _as_list,
    _as_str,
    _require,
)
from .locality import MAX_ANALYSIS_ORDER, STATISTICS, LocalityAnalyzer

# -------------------------
# Config
# -------------------------


@dataclass(frozen=True)
class StudyConfig:
    name: str
    curves: tuple[CurveKind, ...]
    orders: tuple[int, ...]
    statistics: tuple[str, ...]
    wraparound: bool
    jobs: int
    precision: int


def _parse_orders(x: Any) -> tuple[int, ...]:
    if isinstance(x, dict):
        span = _as_dict(x, "orders")
        if "min" in span:
            lo = _as_int(span["min"], "orders.min")
            hi = _as_int(span.get("max", lo), "orders.max")
        else:
            # Default min is 2, or max itself when that is lower.
            hi = _as_int(span.get("max", 2), "orders.max")
            lo = min(2, hi)
        _require(lo <= hi, "orders.min must be <= orders.max")
        orders = list(range(lo, hi + 1))
    else:
        orders = [
            _as_int(v, f"orders[{i}]") for i, v in enumerate(_as_list(x, "orders"))
        ]
    _require(len(orders) > 0, "orders must not be empty")
    for o in orders:
        _require(
            1 <= o <= MAX_ANALYSIS_ORDER,
            f"orders must be between 1 and {MAX_ANALYSIS_ORDER}, got {o}",
        )
    return tuple(sorted(set(orders)))


def parse_config(obj: dict[str, Any]) -> StudyConfig:
    obj = _as_dict(obj, "root")

    name = _as_str(obj.get("name", "Locality study"), "name")

    curve_names = _as_list(obj.get("curves", ["hilbert", "morton"]), "curves")
    _require(len(curve_names) > 0, "curves must not be empty")
    curves = tuple(
        CurveKind.parse(_as_str(c, f"curves[{i}]")) for i, c in enumerate(curve_names)
    )
    _require(len(set(curves)) == len(curves), "curves must not repeat")

    orders = _parse_orders(obj.get("orders", {"min": 2, "max": 6}))

    stat_names = _as_list(obj.get("statistics", ["average", "median"]), "statistics")
    _require(len(stat_names) > 0, "statistics must not be empty")
    statistics: list[str] = []
    for i, s in enumerate(stat_names):
        s = _as_str(s, f"statistics[{i}]")
        _require(
            s in STATISTICS,
            f"statistics[{i}] must be one of {', '.join(STATISTICS)}; got {s!r}",
        )
        statistics.append(s)

    wraparound = _as_bool(obj.get("wraparound", False), "wraparound")

    jobs = _as_int(obj.get("jobs", 1), "jobs")
    _require(jobs >= 1, "jobs must be >= 1")

    precision = _as_int(obj.get("precision", 2), "precision")
    _require(0 <= precision <= 10, "precision must be between 0 and 10")

    return StudyConfig(
        name=name,
        curves=curves,
        orders=orders,
        statistics=tuple(statistics),
        wraparound=wraparound,
        jobs=jobs,
        precision=precision,
    )


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def dump_json(obj: dict[str, Any], path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
        f.write("\n")


# -------------------------
# Running
# -------------------------


@dataclass
class StudyResult:
    config: StudyConfig
    # (curve, statistic) -> {order: value}
    values: dict[tuple[str, str], dict[int, float]] = field(default_factory=dict)

    def row(self, curve: str, statistic: str) -> list[float]:
        cells = self.values[(curve, statistic)]
        return [cells[o] for o in self.config.orders]

    def to_json(self) -> dict[str, Any]:
        cfg = self.config
        return {
            "name": cfg.name,
            "orders": list(cfg.orders),
            "wraparound": cfg.wraparound,
            "results": {
                stat: {c.value: self.row(c.value, stat) for c in cfg.curves}
                for stat in cfg.statistics
            },
        }


def _analyze(
    curve: str, order: int, statistics: tuple[str, ...], wraparound: bool
) -> dict[str, float]:
    kind = CurveKind(curve)
    closed = kind.is_closed
    analyzer = LocalityAnalyzer(kind, order, wraparound=wraparound and closed)
    return {s: analyzer.stretch(s) for s in statistics}


ProgressFn = Callable[[str, int], None]


def run_study(
    cfg: StudyConfig, *, jobs: int | None = None, progress: ProgressFn | None = None
) -> StudyResult:
    """Compute every requested statistic for every (curve, order) pair."""
    workers = cfg.jobs if jobs is None else jobs
    _require(workers >= 1, "jobs must be >= 1")

    tasks = [(c.value, o) for c in cfg.curves for o in cfg.orders]
    result = StudyResult(config=cfg)

    def record(curve: str, order: int, stats: dict[str, float]) -> None:
        for stat, value in stats.items():
            result.values.setdefault((curve, stat), {})[order] = value
        if progress is not None:
            progress(curve, order)

    if workers == 1:
        for curve, order in tasks:
            record(curve, order, _analyze(curve, order, cfg.statistics, cfg.wraparound))
        return result

    with ProcessPoolExecutor(max_workers=workers) as pool:
        futures = {
            pool.submit(_analyze, curve, order, cfg.statistics, cfg.wraparound): (
                curve,
                order,
            )
            for curve, order in tasks
        }
        for fut in as_completed(futures):
            curve, order = futures[fut]
            record(curve, order, fut.result())
    return result


# -------------------------
# Presentation
# -------------------------


def format_table(result: StudyResult) -> str:
    """One block per statistic: curves down, orders across."""
    cfg = result.config
    label_w = max(len("curve \\ order"), *(len(c.value) for c in cfg.curves))
    cells = {
        (stat, c.value): [f"{v:.{cfg.precision}f}" for v in result.row(c.value, stat)]
        for stat in cfg.statistics
        for c in cfg.curves
    }
    col_w = max(
        max(len(str(o)) for o in cfg.orders),
        max(len(s) for row in cells.values() for s in row),
    )

    lines: list[str] = [cfg.name]
    for stat in cfg.statistics:
        lines.append("")
        lines.append(f"{stat} nearest-neighbour stretch")
        header = "curve \\ order".ljust(label_w) + "".join(
            f"  {str(o).rjust(col_w)}" for o in cfg.orders
        )
        lines.append(header)
        lines.append("-" * len(header))
        for c in cfg.curves:
            lines.append(
                c.value.ljust(label_w)
                + "".join(f"  {s.rjust(col_w)}" for s in cells[(stat, c.value)])
            )
    return "\n".join(lines)
