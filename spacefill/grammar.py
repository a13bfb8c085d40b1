"""Context-free string rewriting (L-system) engine.

Symbols are single characters and a symbol sequence is a ``str``. One
rewrite pass replaces every symbol simultaneously by its production; a
symbol with no production is dropped, so grammars that want to keep a
symbol give it an identity rule (``"+": "+"``).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Generator, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .errors import ConfigError, MalformedGrammarError, _require

# -------------------------
# Expansion
# -------------------------


def expand(axiom: str, rules: Mapping[str, str], generations: int) -> str:
    """Return the ``generations``-th rewrite of ``axiom``."""
    _require(generations >= 0, "generations must be >= 0")
    current = axiom
    for _ in range(generations):
        current = "".join(rules.get(ch, "") for ch in current)
    return current


def stream_expand(
    axiom: str, rules: Mapping[str, str], generations: int
) -> Generator[str, None, None]:
    """Yield expanded symbols in order without building the full string.

    Uses an explicit stack of (string, index, depth) frames.
    """
    _require(generations >= 0, "generations must be >= 0")

    stack: list[tuple[str, int, int]] = [(axiom, 0, 0)]

    while stack:
        s, i, d = stack.pop()
        if i >= len(s):
            continue

        ch = s[i]
        stack.append((s, i + 1, d))

        if d < generations:
            repl = rules.get(ch)
            if repl is not None:
                # Pushed after the continuation so it is traversed first.
                stack.append((repl, 0, d + 1))
        else:
            yield ch


def filter_for_drawing(sequence: Iterable[str], skip: Iterable[str]) -> str:
    """Remove every symbol in ``skip`` from ``sequence``, keeping order."""
    skip_set = frozenset(skip)
    return "".join(ch for ch in sequence if ch not in skip_set)


# -------------------------
# Closed-form sizes
# -------------------------


def symbol_counts(
    axiom: str, rules: Mapping[str, str], generations: int
) -> Counter[str]:
    """Count each symbol of the expansion without expanding."""
    _require(generations >= 0, "generations must be >= 0")
    productions = {sym: Counter(repl) for sym, repl in rules.items()}
    counts = Counter(axiom)
    for _ in range(generations):
        nxt: Counter[str] = Counter()
        for sym, n in counts.items():
            for out, k in productions.get(sym, {}).items():
                nxt[out] += n * k
        counts = nxt
    return counts


def expansion_length(axiom: str, rules: Mapping[str, str], generations: int) -> int:
    return sum(symbol_counts(axiom, rules, generations).values())


def reachable_symbols(axiom: str, rules: Mapping[str, str]) -> frozenset[str]:
    """Every symbol that can appear in some generation of ``axiom``."""
    seen: set[str] = set()
    pending = list(axiom)
    while pending:
        sym = pending.pop()
        if sym in seen:
            continue
        seen.add(sym)
        pending.extend(rules.get(sym, ""))
    return frozenset(seen)


# -------------------------
# Grammar value type
# -------------------------


@dataclass(frozen=True)
class Grammar:
    """An axiom, a production table and the symbols stripped before drawing.

    The production table is validated against the alphabet reachable from
    the axiom: a reachable symbol that has no rule and is not in ``skip``
    would silently vanish, so it is rejected with MalformedGrammarError.
    """

    axiom: str
    rules: Mapping[str, str]
    skip: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        _require(isinstance(self.axiom, str), "axiom must be a string", ConfigError)
        _require(len(self.axiom) > 0, "axiom must be non-empty", MalformedGrammarError)
        for k, v in self.rules.items():
            _require(
                isinstance(k, str) and len(k) == 1,
                "rules keys must be single-character strings",
                MalformedGrammarError,
            )
            _require(
                isinstance(v, str), f"rules['{k}'] must be a string", MalformedGrammarError
            )
        skip = frozenset(self.skip)
        for sym in skip:
            _require(
                isinstance(sym, str) and len(sym) == 1,
                "skip symbols must be single-character strings",
                MalformedGrammarError,
            )

        missing = sorted(
            reachable_symbols(self.axiom, self.rules) - set(self.rules) - skip
        )
        _require(
            not missing,
            f"symbols without a production rule: {''.join(missing)!r}",
            MalformedGrammarError,
        )

        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))
        object.__setattr__(self, "skip", skip)

    def expand(self, generations: int) -> str:
        return expand(self.axiom, self.rules, generations)

    def stream(self, generations: int) -> Generator[str, None, None]:
        return stream_expand(self.axiom, self.rules, generations)

    def filter_for_drawing(self, sequence: Iterable[str]) -> str:
        return filter_for_drawing(sequence, self.skip)

    def length(self, generations: int) -> int:
        return expansion_length(self.axiom, self.rules, generations)

    def drawing_length(self, generations: int) -> int:
        counts = symbol_counts(self.axiom, self.rules, generations)
        return sum(n for sym, n in counts.items() if sym not in self.skip)
