"""Command-line interface.

Run:
  python -m spacefill instructions hilbert 3
  python -m spacefill encode hilbert 3 2 5
  python -m spacefill stretch morton 6 --median
  python -m spacefill study example/locality_study.json
  python -m spacefill --help
"""

from __future__ import annotations

import argparse
import json
import sys

from .codec import CurveKind, make_centered_codec, make_codec
from .curves import CurveInstructions, GrammarKind
from .errors import ConfigError, SpaceFillError
from .locality import LocalityAnalyzer
from .study import dump_json, format_table, load_json, parse_config, run_study
from .turtle import path_bounds

HELP_EPILOG = r"""
CURVES

  Grammar curves (instructions, trace): hilbert, moore, gosper, dragon
  Codec curves (sequence, encode, decode, stretch): hilbert, moore, morton

  The grid of an order-n curve is 2^n cells on a side.

COORDINATES

  By default coordinates are zero-based: 0 <= x, y <= 2^n - 1, with (0, 0)
  the bottom-left cell.

  With --centered (hilbert and moore only) coordinates are odd integers
  symmetric about the origin, spacing 2: an order-2 grid spans -3, -1, 1, 3
  on each axis. centered = 2 * zero_based - (2^n - 1).

STUDY CONFIG (study, validate)

  A JSON object; every key is optional.

    name: string (default "Locality study")
        Title printed above the result tables.

    curves: list of codec curve names (default ["hilbert", "morton"])

    orders: {"min": int, "max": int} or a list of ints (default 2..6)
        Each order must be between 1 and 10.
        An omitted min defaults to 2, or to max when max is lower.

    statistics: list of "average" / "median" (default both)
        Per-cell stretches are aggregated with the statistic, then the
        per-cell values are aggregated again over the grid.

    wraparound: boolean (default false)
        Measure index distance around the loop for closed curves (moore):
        min(d, 4^n - d). Open curves are unaffected.

    jobs: integer >= 1 (default 1)
        Worker processes; one task per (curve, order).

    precision: integer 0..10 (default 2)
        Decimal places in the printed tables.

  Example:

    {
      "name": "Hilbert vs Morton",
      "curves": ["hilbert", "morton", "moore"],
      "orders": {"min": 2, "max": 8},
      "statistics": ["average", "median"]
    }
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spacefill",
        description="Space-filling curve instructions, codecs and locality statistics.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )

    sub = p.add_subparsers(dest="cmd", required=True)
    grammar_curves = [k.value for k in GrammarKind]
    codec_curves = [k.value for k in CurveKind]

    pi = sub.add_parser("instructions", help="Print a curve's drawing instructions.")
    pi.add_argument("curve", choices=grammar_curves)
    pi.add_argument("order", type=int)
    pi.add_argument(
        "--raw",
        action="store_true",
        help="Print the full expansion, recursion symbols included.",
    )

    pt = sub.add_parser("trace", help="Print the turtle path of a curve as JSON.")
    pt.add_argument("curve", choices=grammar_curves)
    pt.add_argument("order", type=int)
    pt.add_argument(
        "--bounds",
        action="store_true",
        help="Print the bounding box min_x min_y max_x max_y instead.",
    )

    ps = sub.add_parser("sequence", help="Print grid cells in curve order.")
    ps.add_argument("curve", choices=codec_curves)
    ps.add_argument("order", type=int)

    pe = sub.add_parser("encode", help="Convert a coordinate to a curve index.")
    pe.add_argument("curve", choices=codec_curves)
    pe.add_argument("order", type=int)
    pe.add_argument("x", type=int)
    pe.add_argument("y", type=int)
    pe.add_argument("--centered", action="store_true", help="x, y are centered.")

    pd = sub.add_parser("decode", help="Convert a curve index to a coordinate.")
    pd.add_argument("curve", choices=codec_curves)
    pd.add_argument("order", type=int)
    pd.add_argument("index", type=int)
    pd.add_argument("--centered", action="store_true", help="Print centered x, y.")

    pn = sub.add_parser("stretch", help="Nearest-neighbour stretch of one curve.")
    pn.add_argument("curve", choices=codec_curves)
    pn.add_argument("order", type=int)
    pn.add_argument("--median", action="store_true", help="Use the median.")
    pn.add_argument(
        "--wraparound", action="store_true", help="Loop-aware distance (moore)."
    )

    pr = sub.add_parser(
        "study",
        help="Run a locality study from a JSON config.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pr.add_argument("config", help="Path to the study JSON config.")
    pr.add_argument("--output", help="Also write the results as JSON here.")
    pr.add_argument("--jobs", type=int, default=None, help="Override config jobs.")
    pr.add_argument(
        "--verbose", action="store_true", help="Report each finished task on stderr."
    )

    pv = sub.add_parser("validate", help="Validate a study config.")
    pv.add_argument("config", help="Path to the study JSON config.")

    return p


# -------------------------
# Commands
# -------------------------


def cmd_instructions(curve: str, order: int, raw: bool) -> None:
    instr = CurveInstructions(curve, order)
    if raw:
        print(instr.generate_instruction_string())
    else:
        print(instr.drawing_instructions)


def cmd_trace(curve: str, order: int, bounds: bool) -> None:
    points = CurveInstructions(curve, order).trace()
    if bounds:
        print(" ".join(str(v) for v in path_bounds(points)))
        return
    print(json.dumps([list(p) for p in points]))


def cmd_sequence(curve: str, order: int) -> None:
    for x, y in make_codec(curve, order).coordinate_sequence():
        print(f"{x} {y}")


def cmd_encode(curve: str, order: int, x: int, y: int, centered: bool) -> None:
    if centered:
        print(make_centered_codec(curve, order).coordinate_to_index((x, y)))
    else:
        print(make_codec(curve, order).to_index((x, y)))


def cmd_decode(curve: str, order: int, index: int, centered: bool) -> None:
    if centered:
        x, y = make_centered_codec(curve, order).index_to_coordinate(index)
    else:
        x, y = make_codec(curve, order).from_index(index)
    print(f"{x} {y}")


def cmd_stretch(curve: str, order: int, use_median: bool, wraparound: bool) -> None:
    analyzer = LocalityAnalyzer(curve, order, wraparound=wraparound)
    value = analyzer.median_stretch() if use_median else analyzer.average_stretch()
    print(value)


def cmd_study(
    config_path: str, output_path: str | None, jobs: int | None, verbose: bool
) -> None:
    cfg = parse_config(load_json(config_path))

    def progress(curve: str, order: int) -> None:
        print(f"done: {curve} order {order}", file=sys.stderr)

    result = run_study(cfg, jobs=jobs, progress=progress if verbose else None)
    print(format_table(result))
    if output_path:
        dump_json(result.to_json(), output_path)


def cmd_validate(config_path: str) -> None:
    cfg = parse_config(load_json(config_path))

    print(f"name: {cfg.name}")
    print(f"curves: {', '.join(c.value for c in cfg.curves)}")
    print(f"orders: {', '.join(str(o) for o in cfg.orders)}")
    print(f"statistics: {', '.join(cfg.statistics)}")
    print(f"wraparound: {cfg.wraparound}")
    print(f"jobs: {cfg.jobs} precision: {cfg.precision}")
    cells = sum(4**o for o in cfg.orders) * len(cfg.curves)
    print(f"cells to index: {cells}")


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        if args.cmd == "instructions":
            cmd_instructions(args.curve, args.order, args.raw)
        elif args.cmd == "trace":
            cmd_trace(args.curve, args.order, args.bounds)
        elif args.cmd == "sequence":
            cmd_sequence(args.curve, args.order)
        elif args.cmd == "encode":
            cmd_encode(args.curve, args.order, args.x, args.y, args.centered)
        elif args.cmd == "decode":
            cmd_decode(args.curve, args.order, args.index, args.centered)
        elif args.cmd == "stretch":
            cmd_stretch(args.curve, args.order, args.median, args.wraparound)
        elif args.cmd == "study":
            cmd_study(args.config, args.output, args.jobs, args.verbose)
        elif args.cmd == "validate":
            cmd_validate(args.config)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except SpaceFillError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0
