"""
adfsat/reasoner/verifier.py
===========================
Verifiers: the "verify" half of generate-and-verify.

A verifier decides a semantic property of a candidate independently
of the encoding that produced it. Verifiers that need a SAT oracle own
a private solver state, prepared once and reused for every candidate.

Mathematical basis (three-valued ADF semantics):
    Γ_D(v)(a) = t   if every two-valued completion w of v has w ⊨ C_a
                f   if no completion w of v has w ⊨ C_a
                u   otherwise

    admissible:  v ≤_i Γ_D(v)
    complete:    v = Γ_D(v)
    preferred:   ≤_i-maximal admissible
    grounded:    least fixpoint of Γ_D
    model:       two-valued and v(a) = v(C_a) for all a
    stable:      model v such that the grounded interpretation of the
                 reduct D^v (arguments true in v, false ones replaced
                 by ⊥) assigns t to every argument true in v

Γ_D is decided with two satisfiability checks per argument on the
definitional encoding d_a ↔ C_a, fixing decided arguments through
assumptions:
    C_a valid under v        iff  UNSAT(v ∧ ¬d_a)
    C_a unsatisfiable under v iff UNSAT(v ∧ d_a)

Reference: Brewka, Strass, Ellmauthaler, Wallner & Woltran (2013),
"Abstract Dialectical Frameworks Revisited".
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from adfsat.core.exceptions import ProtocolError, UnknownArgument, UseAfterClose
from adfsat.core.types import Argument, Interpretation, Literal, TruthValue
from adfsat.reasoner.generator import ConflictFreeGenerator
from adfsat.sat.encodings import DefinitionalSatEncoding, RefineLargerSatEncoding
from adfsat.sat.mapping import PropositionalMapping
from adfsat.sat.state import SatSolver, SatSolverState, Z3SatSolver
from adfsat.syntax.adf import AbstractDialecticalFramework

logger = logging.getLogger(__name__)


class Verifier(ABC):
    """Checks one property of candidate interpretations.

    Lifecycle:
        prepare()  once, before the first verify()
        verify(v)  any number of times; same v → same answer
        close()    release resources; later calls raise UseAfterClose
    """

    def __init__(
        self,
        adf: AbstractDialecticalFramework,
        mapping: PropositionalMapping,
        solver: Optional[SatSolver] = None,
    ):
        self.adf = adf
        self.mapping = mapping
        self.solver = solver or Z3SatSolver()
        self._prepared = False
        self._closed = False

    def prepare(self) -> None:
        self._require_open("prepare")
        if self._prepared:
            raise ProtocolError(f"{type(self).__name__} is already prepared.")
        self._prepare()
        self._prepared = True

    def verify(self, interpretation: Interpretation) -> bool:
        self._require_open("verify")
        if not self._prepared:
            raise ProtocolError(
                f"{type(self).__name__}.prepare() must be called before verify().",
            )
        for argument in sorted(interpretation.arguments()):
            if argument not in self.mapping:
                raise UnknownArgument(argument, context={"verifier": type(self).__name__})
        return self._verify(interpretation)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "Verifier":
        self._require_open("__enter__")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_open(self, operation: str) -> None:
        if self._closed:
            raise UseAfterClose(type(self).__name__, operation)

    def _prepare(self) -> None:
        pass

    @abstractmethod
    def _verify(self, interpretation: Interpretation) -> bool: ...

    def _close(self) -> None:
        pass


# ─────────────────────────────────────────────
#  Γ OPERATOR ON A DEFINITIONAL SOLVER STATE
# ─────────────────────────────────────────────


def decided_assumptions(
    interpretation: Interpretation,
    mapping: PropositionalMapping,
) -> List[Literal]:
    """Argument literals fixing every decided argument of ``interpretation``."""
    lits = []
    for argument in mapping.arguments:
        value = interpretation.value(argument)
        if value is TruthValue.TRUE:
            lits.append(mapping.literal(argument))
        elif value is TruthValue.FALSE:
            lits.append(-mapping.literal(argument))
    return lits


def gamma(
    state: SatSolverState,
    definition: Literal,
    assumptions: List[Literal],
) -> TruthValue:
    """Γ value of one argument whose condition is defined by ``definition``."""
    if not state.satisfiable(assumptions + [-definition]):
        return TruthValue.TRUE
    if not state.satisfiable(assumptions + [definition]):
        return TruthValue.FALSE
    return TruthValue.UNDECIDED


def grounded_fixpoint(
    state: SatSolverState,
    mapping: PropositionalMapping,
    definitions: Dict[Argument, Literal],
    arguments: Iterable[Argument],
    fixed: Iterable[Literal] = (),
) -> Dict[Argument, TruthValue]:
    """Least fixpoint of Γ restricted to ``arguments``.

    Args:
        state:       Solver state holding the definitional encoding.
        definitions: d_a literals from DefinitionalSatEncoding.
        arguments:   Arguments the iteration decides.
        fixed:       Argument literals held constant (e.g. reduct ⊥s).

    Returns:
        Argument → TruthValue for every argument in ``arguments``.
    """
    values = {argument: TruthValue.UNDECIDED for argument in arguments}
    fixed = list(fixed)
    changed = True
    rounds = 0
    while changed:
        changed = False
        rounds += 1
        for argument, value in values.items():
            if value.is_decided:
                continue
            assumptions = fixed + [
                mapping.literal(a) if v is TruthValue.TRUE else -mapping.literal(a)
                for a, v in values.items()
                if v.is_decided
            ]
            new_value = gamma(state, definitions[argument], assumptions)
            if new_value.is_decided:
                values[argument] = new_value
                changed = True
    logger.debug("Grounded fixpoint reached after %d round(s)", rounds)
    return values


class _DefinitionalVerifier(Verifier):
    """Verifier backed by a private state holding d_a ↔ C_a."""

    _state: Optional[SatSolverState] = None

    def _prepare(self) -> None:
        self._state = self.solver.create_state()
        self._encoding = DefinitionalSatEncoding()
        self._encoding.encode(self._state.add, self.adf, self.mapping)

    @property
    def definitions(self) -> Dict[Argument, Literal]:
        return self._encoding.definitions

    def _close(self) -> None:
        if self._state is not None:
            self._state.close()


# ─────────────────────────────────────────────
#  VERIFIER VARIANTS
# ─────────────────────────────────────────────


class AdmissibleVerifier(_DefinitionalVerifier):
    """v ≤_i Γ(v): decided arguments keep their value in every completion.

    Encoded once in ``prepare``, per argument a:
        p_a → ¬d_a      "a is TRUE in v but C_a can be falsified"
        q_a → d_a       "a is FALSE in v but C_a can be satisfied"
        g → ∨_a (p_a ∨ q_a)
    Each check is a single solver call assuming g, the decided values of
    v and ¬p_a / ¬q_a for every guard v does not select. Nothing is
    asserted per candidate, so the state keeps its size.
    """

    def _prepare(self) -> None:
        super()._prepare()
        self._violated_true: Dict[Argument, Literal] = {}
        self._violated_false: Dict[Argument, Literal] = {}
        for argument in self.mapping.arguments:
            d = self.definitions[argument]
            p, q = self.mapping.fresh(), self.mapping.fresh()
            self._state.add((-p, -d))
            self._state.add((-q, d))
            self._violated_true[argument] = p
            self._violated_false[argument] = q
        self._select = self.mapping.fresh()
        self._state.add(
            (-self._select,)
            + tuple(self._violated_true.values())
            + tuple(self._violated_false.values())
        )

    def _verify(self, interpretation: Interpretation) -> bool:
        if not (interpretation.satisfied() or interpretation.unsatisfied()):
            return True

        assumptions = decided_assumptions(interpretation, self.mapping) + [self._select]
        for argument in self.mapping.arguments:
            value = interpretation.value(argument)
            if value is not TruthValue.TRUE:
                assumptions.append(-self._violated_true[argument])
            if value is not TruthValue.FALSE:
                assumptions.append(-self._violated_false[argument])
        counterexample = self._state.satisfiable(assumptions)
        logger.debug("Admissible %s: %s", interpretation, not counterexample)
        return not counterexample


class CompleteVerifier(_DefinitionalVerifier):
    """v = Γ(v), checked argument by argument."""

    def _verify(self, interpretation: Interpretation) -> bool:
        assumptions = decided_assumptions(interpretation, self.mapping)
        for argument in self.mapping.arguments:
            if gamma(self._state, self.definitions[argument], assumptions) is not interpretation.value(argument):
                return False
        return True


class ModelVerifier(Verifier):
    """Two-valued and every argument agrees with its own condition."""

    def _verify(self, interpretation: Interpretation) -> bool:
        if not interpretation.is_two_valued() or interpretation.arguments() != set(self.adf):
            return False
        assignment = {a: v is TruthValue.TRUE for a, v in interpretation.as_dict().items()}
        return all(
            self.adf.acceptance_condition(a).evaluate(assignment) == assignment[a]
            for a in self.adf
        )


class StableVerifier(_DefinitionalVerifier):
    """Stability of two-valued models via the grounded reduct."""

    def _verify(self, interpretation: Interpretation) -> bool:
        if not interpretation.is_two_valued():
            return False
        accepted = sorted(interpretation.satisfied())
        reduct_bottoms = [-self.mapping.literal(a) for a in sorted(interpretation.unsatisfied())]
        grounded = grounded_fixpoint(
            self._state, self.mapping, self.definitions, accepted, fixed=reduct_bottoms
        )
        return all(value is TruthValue.TRUE for value in grounded.values())


class MaximalityVerifier(Verifier):
    """No admissible interpretation lies strictly above v in ≤_i.

    Runs a private sub-enumeration per candidate: conflict-free
    interpretations strictly extending v, each checked for
    admissibility. v is maximal iff none passes.
    """

    _admissible: Optional[AdmissibleVerifier] = None

    def _prepare(self) -> None:
        self._admissible = AdmissibleVerifier(self.adf, self.mapping, self.solver)
        self._admissible.prepare()

    def _verify(self, interpretation: Interpretation) -> bool:
        with self.solver.create_state() as state:
            generator = ConflictFreeGenerator(self.adf, self.mapping)
            generator.prepare(state.add)
            RefineLargerSatEncoding(interpretation).encode(state.add, self.adf, self.mapping)
            while True:
                larger = generator.generate(state)
                if larger is None:
                    return True
                if self._admissible.verify(larger):
                    logger.debug("%s is extended by admissible %s", interpretation, larger)
                    return False

    def _close(self) -> None:
        if self._admissible is not None:
            self._admissible.close()
