"""Production rules of the grammar-defined curves.

Each curve is a fixed ``Grammar`` plus the turtle conventions needed to
draw it. Hilbert and Moore carry the recursion symbols ``L``/``R`` that are
stripped before drawing; Gosper and Dragon draw every symbol they emit.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import cached_property

from .errors import ConfigError, InvalidOrderError, _require, check_order
from .grammar import Grammar
from .turtle import Point, TurtleState, trace

MAX_INSTRUCTION_LENGTH = 1 << 24

# Generous cap checked before the closed-form size test so that absurd
# orders fail fast without counting symbols for every generation.
MAX_GRAMMAR_ORDER = 32


class GrammarKind(enum.Enum):
    HILBERT = "hilbert"
    MOORE = "moore"
    GOSPER = "gosper"
    DRAGON = "dragon"

    @classmethod
    def parse(cls, name: str) -> GrammarKind:
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(k.value for k in cls)
            raise ConfigError(
                f"unknown grammar curve {name!r} (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class CurveSpec:
    grammar: Grammar
    turn_angle: float
    forward: frozenset[str]
    # Recursion levels already encoded in the axiom.
    axiom_depth: int = 0


_IDENTITY_TURNS = {"+": "+", "-": "-"}

CURVE_SPECS: dict[GrammarKind, CurveSpec] = {
    GrammarKind.HILBERT: CurveSpec(
        grammar=Grammar(
            axiom="L",
            rules={
                "L": "+RF-LFL-FR+",
                "R": "-LF+RFR+FL-",
                "F": "F",
                **_IDENTITY_TURNS,
            },
            skip=frozenset("LR"),
        ),
        turn_angle=90,
        forward=frozenset("F"),
    ),
    GrammarKind.MOORE: CurveSpec(
        grammar=Grammar(
            axiom="LFL+F+LFL",
            rules={
                "L": "-RF+LFL+FR-",
                "R": "+LF-RFR-FL+",
                "F": "F",
                **_IDENTITY_TURNS,
            },
            skip=frozenset("LR"),
        ),
        turn_angle=90,
        forward=frozenset("F"),
        # An order-1 Moore curve is the axiom alone.
        axiom_depth=1,
    ),
    GrammarKind.GOSPER: CurveSpec(
        grammar=Grammar(
            axiom="A",
            rules={
                "A": "A-B--B+A++AA+B-",
                "B": "+A-BB--B-A++A+B",
                **_IDENTITY_TURNS,
            },
        ),
        turn_angle=60,
        forward=frozenset("AB"),
    ),
    GrammarKind.DRAGON: CurveSpec(
        grammar=Grammar(
            axiom="F",
            rules={"F": "F+G", "G": "F-G", **_IDENTITY_TURNS},
        ),
        turn_angle=90,
        forward=frozenset("FG"),
    ),
}


class CurveInstructions:
    """Instruction strings for one grammar curve at one order."""

    def __init__(self, kind: GrammarKind | str, order: int) -> None:
        if isinstance(kind, str):
            kind = GrammarKind.parse(kind)
        self._kind = kind
        self._spec = CURVE_SPECS[kind]
        self._order = check_order(order, maximum=MAX_GRAMMAR_ORDER, what=kind.value)

        size = self._spec.grammar.length(self.depth)
        _require(
            size <= MAX_INSTRUCTION_LENGTH,
            f"{kind.value} order {order} expands to {size} symbols "
            f"(limit {MAX_INSTRUCTION_LENGTH})",
            InvalidOrderError,
        )

    @property
    def kind(self) -> GrammarKind:
        return self._kind

    @property
    def order(self) -> int:
        return self._order

    @property
    def grammar(self) -> Grammar:
        return self._spec.grammar

    @property
    def depth(self) -> int:
        """Number of rewrite passes applied to the axiom."""
        return self._order - self._spec.axiom_depth

    @property
    def turn_angle(self) -> float:
        return self._spec.turn_angle

    @property
    def forward_symbols(self) -> frozenset[str]:
        return self._spec.forward

    def generate_instruction_string(self) -> str:
        return self.grammar.expand(self.depth)

    def filter_for_drawing(self, sequence: str) -> str:
        return self.grammar.filter_for_drawing(sequence)

    @cached_property
    def drawing_instructions(self) -> str:
        return self.filter_for_drawing(self.generate_instruction_string())

    def trace(self, start: TurtleState = TurtleState(0, 0, 90)) -> list[Point]:
        """Points visited when the drawing instructions are walked by a turtle."""
        return trace(
            self.grammar.filter_for_drawing(self.grammar.stream(self.depth)),
            angle_deg=self.turn_angle,
            forward=self.forward_symbols,
            start=start,
        )

    def __repr__(self) -> str:
        return f"CurveInstructions({self._kind.value!r}, order={self._order})"
