"""
adfsat/sat/encodings.py
=======================
Clause encodings of ADF properties.

Every encoding streams clauses into a sink instead of returning a
collection, so it can be applied straight to a solver state
(``encode(state.add, adf, mapping)``) or collected for inspection
(``encode(clauses.append, adf, mapping)``).

Acceptance conditions are translated with the Tseitin transformation:
each inner node φ of a formula gets a fresh variable x_φ together with
clauses stating x_φ ↔ φ(children). The result is linear in the size
of the formula, unlike distribution-based CNF conversion.

    x ↔ (c₁ ∧ … ∧ cₙ):   (¬x ∨ cᵢ) for all i,   (x ∨ ¬c₁ ∨ … ∨ ¬cₙ)
    x ↔ (c₁ ∨ … ∨ cₙ):   (x ∨ ¬cᵢ) for all i,   (¬x ∨ c₁ ∨ … ∨ cₙ)
    x ↔ (c₁ ↔ c₂):        four ternary clauses
    ¬c:                   no new variable, the literal is negated

Reference: Tseitin (1968), "On the complexity of derivation in
propositional calculus"; Linsbichler, Maratea, Niskanen, Wallner &
Woltran (2018), "Novel algorithms for abstract dialectical frameworks
based on complexity analysis of subclasses and SAT solving".
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple

from adfsat.core.types import (
    Argument,
    Clause,
    Interpretation,
    Literal,
    LogicConnective,
    TruthValue,
)
from adfsat.sat.mapping import PropositionalMapping
from adfsat.syntax.acceptance import AcceptanceCondition
from adfsat.syntax.adf import AbstractDialecticalFramework

logger = logging.getLogger(__name__)

ClauseSink = Callable[[Clause], None]


# ─────────────────────────────────────────────
#  TSEITIN TRANSFORMATION
# ─────────────────────────────────────────────


class TseitinTransformer:
    """Defines formulas by literals, emitting the defining clauses.

    Usage:
        tseitin = TseitinTransformer(sink, mapping, mapping.literal)
        x = tseitin.define(condition)   # x ↔ condition now holds
    """

    def __init__(
        self,
        sink: ClauseSink,
        mapping: PropositionalMapping,
        atom_literal: Callable[[Argument], Literal],
    ):
        self._sink = sink
        self._mapping = mapping
        self._atom_literal = atom_literal
        self._true: Optional[Literal] = None

    def define(self, condition: AcceptanceCondition) -> Literal:
        return condition.fold(self._atom_literal, self._define_node)

    def _define_node(self, connective: LogicConnective, children: Tuple[Literal, ...]) -> Literal:
        if connective == LogicConnective.TAUTOLOGY:
            return self._top()
        if connective == LogicConnective.CONTRADICTION:
            return -self._top()
        if connective == LogicConnective.NOT:
            return -children[0]
        if connective == LogicConnective.AND:
            return self._conjunction(children)
        if connective == LogicConnective.OR:
            return -self._conjunction(tuple(-c for c in children))
        if connective == LogicConnective.IMPLIES:
            return -self._conjunction((children[0], -children[1]))
        if connective == LogicConnective.IFF:
            return self._equivalence(children[0], children[1])
        raise ValueError(f"Unsupported connective: {connective}")  # pragma: no cover

    def _top(self) -> Literal:
        if self._true is None:
            self._true = self._mapping.fresh()
            self._sink((self._true,))
        return self._true

    def _conjunction(self, children: Tuple[Literal, ...]) -> Literal:
        if len(children) == 1:
            return children[0]
        x = self._mapping.fresh()
        for c in children:
            self._sink((-x, c))
        self._sink((x,) + tuple(-c for c in children))
        return x

    def _equivalence(self, a: Literal, b: Literal) -> Literal:
        x = self._mapping.fresh()
        self._sink((-x, -a, b))
        self._sink((-x, a, -b))
        self._sink((x, a, b))
        self._sink((x, -a, -b))
        return x


# ─────────────────────────────────────────────
#  ENCODINGS
# ─────────────────────────────────────────────


class SatEncoding(ABC):
    """A clause-producing property of an ADF."""

    @abstractmethod
    def encode(
        self,
        sink: ClauseSink,
        adf: AbstractDialecticalFramework,
        mapping: PropositionalMapping,
    ) -> None: ...


class TwoValuedModelSatEncoding(SatEncoding):
    """s_a ↔ C_a for every argument a.

    The models of the emitted clauses, projected on the argument
    literals, are exactly the two-valued models of the ADF.
    """

    def encode(self, sink, adf, mapping) -> None:
        tseitin = TseitinTransformer(sink, mapping, mapping.literal)
        for argument in adf.arguments():
            s = mapping.literal(argument)
            c = tseitin.define(adf.acceptance_condition(argument))
            sink((-s, c))
            sink((s, -c))
        logger.debug("Two-valued model encoding: %d argument(s)", len(adf))


class DefinitionalSatEncoding(SatEncoding):
    """d_a ↔ C_a over the argument literals, with d_a left free.

    After ``encode``, ``definitions[a]`` is the literal d_a. Verifiers
    use it to evaluate acceptance conditions under assumptions on the
    argument literals without fixing any argument to its condition.
    """

    def __init__(self):
        self.definitions: Dict[Argument, Literal] = {}

    def encode(self, sink, adf, mapping) -> None:
        tseitin = TseitinTransformer(sink, mapping, mapping.literal)
        for argument in adf.arguments():
            self.definitions[argument] = tseitin.define(adf.acceptance_condition(argument))


class RefineUnequalSatEncoding(SatEncoding):
    """Blocking clause excluding exactly one interpretation.

    Two-valued (default), over the argument literals:
        TRUE → ¬s_a,  FALSE → s_a
    Three-valued, over the satisfied/unsatisfied pairs:
        TRUE → ¬s_a,  FALSE → ¬u_a,  UNDECIDED → s_a ∨ u_a
    """

    def __init__(self, interpretation: Interpretation, three_valued: bool = False):
        self.interpretation = interpretation
        self.three_valued = three_valued

    def encode(self, sink, adf, mapping) -> None:
        clause = []
        for argument in mapping.arguments:
            value = self.interpretation.value(argument)
            if value is None:
                continue
            if self.three_valued:
                if value is TruthValue.TRUE:
                    clause.append(-mapping.satisfied(argument))
                elif value is TruthValue.FALSE:
                    clause.append(-mapping.unsatisfied(argument))
                else:
                    clause.append(mapping.satisfied(argument))
                    clause.append(mapping.unsatisfied(argument))
            else:
                if value is TruthValue.UNDECIDED:
                    raise ValueError(
                        f"Two-valued refinement got undecided argument '{argument}'."
                    )
                lit = mapping.literal(argument)
                clause.append(-lit if value is TruthValue.TRUE else lit)
        sink(tuple(clause))


class ConflictFreeInterpretationSatEncoding(SatEncoding):
    """Three-valued interpretations v with, for every argument a:

        ¬(s_a ∧ u_a)
        s_a → some two-valued completion of v satisfies C_a
        u_a → some two-valued completion of v falsifies C_a

    Each implication gets its own copy x_b of the parents b, tied to
    v by s_b → x_b and u_b → ¬x_b and free when b is undecided.
    """

    def encode(self, sink, adf, mapping) -> None:
        for argument in adf.arguments():
            s, u = mapping.satisfied(argument), mapping.unsatisfied(argument)
            sink((-s, -u))
            sink((-s, self._completion(sink, adf, mapping, argument)))
            sink((-u, -self._completion(sink, adf, mapping, argument)))
        logger.debug("Conflict-free encoding: %d argument(s)", len(adf))

    @staticmethod
    def _completion(sink, adf, mapping, argument: Argument) -> Literal:
        """Literal for C_a over a fresh completion copy of its parents."""
        copies: Dict[Argument, Literal] = {}
        for parent in sorted(adf.parents(argument)):
            x = mapping.fresh()
            sink((-mapping.satisfied(parent), x))
            sink((-mapping.unsatisfied(parent), -x))
            copies[parent] = x
        tseitin = TseitinTransformer(sink, mapping, copies.__getitem__)
        return tseitin.define(adf.acceptance_condition(argument))


class CompleteCandidateSatEncoding(ConflictFreeInterpretationSatEncoding):
    """Strengthened conflict-freeness used as complete-semantics candidates:

        ¬(s_a ∧ u_a)
        ¬u_a → some completion of v satisfies C_a
        ¬s_a → some completion of v falsifies C_a

    so an undecided argument's condition is both satisfiable and
    refutable under v. Admissibility on top yields completeness.
    """

    def encode(self, sink, adf, mapping) -> None:
        for argument in adf.arguments():
            s, u = mapping.satisfied(argument), mapping.unsatisfied(argument)
            sink((-s, -u))
            sink((u, self._completion(sink, adf, mapping, argument)))
            sink((s, -self._completion(sink, adf, mapping, argument)))
        logger.debug("Complete-candidate encoding: %d argument(s)", len(adf))


class RefineLargerSatEncoding(SatEncoding):
    """Interpretations strictly above ``interpretation`` in ≤_i.

    Keeps every decided value and decides at least one undecided
    argument. Emits the empty clause for two-valued interpretations,
    which have no strict extension.
    """

    def __init__(self, interpretation: Interpretation):
        self.interpretation = interpretation

    def encode(self, sink, adf, mapping) -> None:
        for argument in sorted(self.interpretation.satisfied()):
            sink((mapping.satisfied(argument),))
        for argument in sorted(self.interpretation.unsatisfied()):
            sink((mapping.unsatisfied(argument),))
        clause = []
        for argument in sorted(self.interpretation.undecided()):
            clause.append(mapping.satisfied(argument))
            clause.append(mapping.unsatisfied(argument))
        sink(tuple(clause))
