#!/usr/bin/env python3
from collections.abc import Callable

import pytest

from spacefill.curves import CURVE_SPECS, CurveInstructions, GrammarKind
from spacefill.errors import ConfigError, InvalidOrderError, MalformedGrammarError
from spacefill.grammar import (
    Grammar,
    expand,
    expansion_length,
    filter_for_drawing,
    reachable_symbols,
    stream_expand,
)
from spacefill.turtle import Point, TurtleState, path_bounds, trace


class TestExpansion:
    def test_simple_expansion(self) -> None:
        # Algae: A -> AB, B -> A
        rules = {"A": "AB", "B": "A"}
        assert expand("A", rules, 0) == "A"
        assert expand("A", rules, 1) == "AB"
        assert expand("A", rules, 2) == "ABA"
        assert expand("A", rules, 3) == "ABAAB"

    def test_symbols_without_rule_are_dropped(self) -> None:
        assert expand("F+-F", {"F": "F"}, 1) == "FF"
        assert expand("A", {"A": "a"}, 2) == ""

    def test_zero_generations_with_rules(self) -> None:
        # The axiom passes through unchanged, rule-less symbols included
        assert expand("F+-F", {"F": "FF"}, 0) == "F+-F"

    def test_negative_generations(self) -> None:
        with pytest.raises(ConfigError):
            expand("F", {"F": "F"}, -1)
        with pytest.raises(ConfigError):
            list(stream_expand("F", {"F": "F"}, -1))

    def test_stream_matches_expand(self) -> None:
        grammar = CURVE_SPECS[GrammarKind.HILBERT].grammar
        for g in range(5):
            assert "".join(grammar.stream(g)) == grammar.expand(g)

    def test_stream_drops_symbols_without_rule(self) -> None:
        assert "".join(stream_expand("AXB", {"A": "a", "B": "b"}, 1)) == "ab"
        assert "".join(stream_expand("A", {"A": "a"}, 2)) == ""

    def test_filter_for_drawing(self) -> None:
        assert filter_for_drawing("+RF-LFL-FR+", "LR") == "+F-F-F+"
        assert filter_for_drawing("F+G", "") == "F+G"

    def test_expansion_length_matches_expand(self) -> None:
        rules = {"A": "AB", "B": "A"}
        # Fibonacci word lengths
        assert [expansion_length("A", rules, g) for g in range(6)] == [
            1,
            2,
            3,
            5,
            8,
            13,
        ]

    def test_reachable_symbols(self) -> None:
        rules = {"A": "A+B", "B": "C"}
        assert reachable_symbols("A", rules) == frozenset("A+BC")


class TestGrammarValidation:
    def test_unreachable_gaps_are_rejected(self) -> None:
        with pytest.raises(MalformedGrammarError):
            Grammar(axiom="AX", rules={"A": "A"})
        with pytest.raises(MalformedGrammarError):
            Grammar(axiom="A", rules={"A": "AB"})

    def test_skip_symbols_may_lack_rules(self) -> None:
        grammar = Grammar(axiom="A", rules={"A": "AL"}, skip=frozenset("L"))
        assert grammar.expand(1) == "AL"
        assert grammar.filter_for_drawing(grammar.expand(2)) == "A"

    def test_empty_axiom(self) -> None:
        with pytest.raises(MalformedGrammarError):
            Grammar(axiom="", rules={})

    def test_multichar_rule_key(self) -> None:
        with pytest.raises(MalformedGrammarError):
            Grammar(axiom="F", rules={"F": "F", "FF": "F"})

    def test_rules_are_read_only(self) -> None:
        grammar = Grammar(axiom="F", rules={"F": "F+F", "+": "+"})
        with pytest.raises(TypeError):
            grammar.rules["F"] = "F"  # type: ignore[index]

    def test_rules_copied_from_caller(self) -> None:
        rules = {"F": "F+F", "+": "+"}
        grammar = Grammar(axiom="F", rules=rules)
        rules["F"] = "F"
        assert grammar.expand(1) == "F+F"


def _hilbert_length(g: int) -> int:
    return 4**g + (4**g - 1) + 4 * (4**g - 1) // 3


def _moore_length(g: int) -> int:
    return 4 * 4**g + (4 ** (g + 1) - 1) + 2 + 16 * (4**g - 1) // 3


def _gosper_length(g: int) -> int:
    return 7**g + 4 * (7**g - 1) // 3


def _dragon_length(g: int) -> int:
    return 2 ** (g + 1) - 1


class TestCurveGrammars:
    @pytest.mark.parametrize("g", range(5))
    @pytest.mark.parametrize(
        "kind, closed_form",
        [
            (GrammarKind.HILBERT, _hilbert_length),
            (GrammarKind.MOORE, _moore_length),
            (GrammarKind.GOSPER, _gosper_length),
            (GrammarKind.DRAGON, _dragon_length),
        ],
    )
    def test_expansion_length(
        self, kind: GrammarKind, closed_form: Callable[[int], int], g: int
    ) -> None:
        grammar = CURVE_SPECS[kind].grammar
        assert len(grammar.expand(g)) == closed_form(g)
        assert grammar.length(g) == closed_form(g)

    @pytest.mark.parametrize("order", range(1, 6))
    def test_hilbert_and_moore_draw_one_step_per_cell(self, order: int) -> None:
        for kind in (GrammarKind.HILBERT, GrammarKind.MOORE):
            instr = CurveInstructions(kind, order)
            assert instr.drawing_instructions.count("F") == 4**order - 1
            assert instr.grammar.drawing_length(instr.depth) == len(
                instr.drawing_instructions
            )

    def test_hilbert_order_one(self) -> None:
        instr = CurveInstructions("hilbert", 1)
        assert instr.generate_instruction_string() == "+RF-LFL-FR+"
        assert instr.drawing_instructions == "+F-F-F+"

    def test_moore_order_one_is_the_axiom(self) -> None:
        instr = CurveInstructions("moore", 1)
        assert instr.depth == 0
        assert instr.generate_instruction_string() == "LFL+F+LFL"
        assert instr.drawing_instructions == "F+F+F"

    def test_moore_depth_offset(self) -> None:
        instr = CurveInstructions("moore", 2)
        assert instr.depth == 1
        assert len(instr.generate_instruction_string()) == 49

    def test_gosper_and_dragon_skip_nothing(self) -> None:
        for kind in (GrammarKind.GOSPER, GrammarKind.DRAGON):
            instr = CurveInstructions(kind, 3)
            raw = instr.generate_instruction_string()
            assert instr.filter_for_drawing(raw) == raw

    def test_turn_angles(self) -> None:
        assert CurveInstructions("hilbert", 2).turn_angle == 90
        assert CurveInstructions("moore", 2).turn_angle == 90
        assert CurveInstructions("dragon", 2).turn_angle == 90
        assert CurveInstructions("gosper", 2).turn_angle == 60

    def test_invalid_orders(self) -> None:
        for order in (0, -1):
            with pytest.raises(InvalidOrderError):
                CurveInstructions("hilbert", order)
        with pytest.raises(InvalidOrderError):
            CurveInstructions("dragon", True)  # type: ignore[arg-type]
        with pytest.raises(InvalidOrderError):
            CurveInstructions("dragon", 40)

    def test_expansion_size_ceiling(self) -> None:
        assert CurveInstructions("hilbert", 11).depth == 11
        with pytest.raises(InvalidOrderError):
            CurveInstructions("hilbert", 12)
        with pytest.raises(InvalidOrderError):
            CurveInstructions("gosper", 9)

    def test_unknown_curve(self) -> None:
        with pytest.raises(ConfigError):
            CurveInstructions("peano", 2)


def _unit_steps(points: list[Point]) -> bool:
    return all(
        abs(x1 - x0) + abs(y1 - y0) == 1
        for (x0, y0), (x1, y1) in zip(points, points[1:])
    )


class TestTrace:
    @pytest.mark.parametrize("order", range(1, 5))
    def test_hilbert_visits_every_cell(self, order: int) -> None:
        points = CurveInstructions("hilbert", order).trace()
        assert len(points) == 4**order
        assert len(set(points)) == 4**order
        assert _unit_steps(points)
        min_x, min_y, max_x, max_y = path_bounds(points)
        assert max_x - min_x == 2**order - 1
        assert max_y - min_y == 2**order - 1

    @pytest.mark.parametrize("order", range(1, 5))
    def test_moore_is_a_closed_loop(self, order: int) -> None:
        points = CurveInstructions("moore", order).trace()
        assert len(set(points)) == 4**order
        assert _unit_steps(points)
        (x0, y0), (xn, yn) = points[0], points[-1]
        assert abs(xn - x0) + abs(yn - y0) == 1

    def test_moore_order_one_path(self) -> None:
        assert CurveInstructions("moore", 1).trace() == [(0, 0), (0, 1), (-1, 1), (-1, 0)]

    def test_dragon_segment_count(self) -> None:
        points = CurveInstructions("dragon", 5).trace()
        assert len(points) == 2**5 + 1
        assert _unit_steps(points)

    def test_gosper_steps_have_unit_length(self) -> None:
        points = CurveInstructions("gosper", 2).trace()
        assert len(points) == 7**2 + 1
        for (x0, y0), (x1, y1) in zip(points, points[1:]):
            assert ((x1 - x0) ** 2 + (y1 - y0) ** 2) ** 0.5 == pytest.approx(1)

    def test_unknown_symbol(self) -> None:
        with pytest.raises(ConfigError):
            trace("FX", angle_deg=90, forward="F")

    def test_start_state(self) -> None:
        points = trace("F+F", angle_deg=90, forward="F", start=TurtleState(2, 3, 0))
        assert points == [(2, 3), (3, 3), (3, 4)]

    def test_empty_bounds(self) -> None:
        with pytest.raises(ConfigError):
            path_bounds([])
